"""
Blade Stock Backend — Row Transformer Unit Tests
==================================================

Pure functions, so plain dicts stand in for database rows.
"""

from bladestock.transformers import (
    count_or_zero,
    fold_two_level,
    map_blade_assignments,
    map_machine_blades,
    map_machine_status,
    nest_inventory,
)


class TestNestInventory:
    def test_groups_then_blade_types(self):
        rows = [
            {"group_name": "A", "blade_type": "X", "fixed": 10, "available": 4},
            {"group_name": "A", "blade_type": "Y", "fixed": 3, "available": 1},
            {"group_name": "B", "blade_type": "X", "fixed": 7, "available": 7},
        ]

        assert nest_inventory(rows) == {
            "A": {"X": {"fixed": 10, "available": 4}, "Y": {"fixed": 3, "available": 1}},
            "B": {"X": {"fixed": 7, "available": 7}},
        }

    def test_same_blade_type_in_two_groups_is_not_merged(self):
        rows = [
            {"group_name": "A", "blade_type": "X", "fixed": 1, "available": 1},
            {"group_name": "B", "blade_type": "X", "fixed": 2, "available": 2},
        ]

        nested = nest_inventory(rows)

        assert nested["A"]["X"] == {"fixed": 1, "available": 1}
        assert nested["B"]["X"] == {"fixed": 2, "available": 2}
        assert nested["A"] is not nested["B"]

    def test_missing_counts_default_to_zero(self):
        rows = [
            {"group_name": "A", "blade_type": "X", "fixed": None, "available": 5},
            {"group_name": "A", "blade_type": "Y"},
        ]

        nested = nest_inventory(rows)

        assert nested["A"]["X"] == {"fixed": 0, "available": 5}
        assert nested["A"]["Y"] == {"fixed": 0, "available": 0}

    def test_empty_rows(self):
        assert nest_inventory([]) == {}


class TestFoldTwoLevel:
    def test_later_record_overwrites_same_keys(self):
        rows = [{"g": "A", "t": "X", "n": 1}, {"g": "A", "t": "X", "n": 9}]

        assert fold_two_level(rows, "g", "t", lambda r: r["n"]) == {"A": {"X": 9}}

    def test_preserves_first_seen_group_order(self):
        rows = [{"g": "B", "t": "X"}, {"g": "A", "t": "X"}, {"g": "B", "t": "Y"}]

        nested = fold_two_level(rows, "g", "t", lambda r: True)

        assert list(nested) == ["B", "A"]
        assert list(nested["B"]) == ["X", "Y"]


class TestMachineMappings:
    def test_machine_blades(self):
        rows = [
            {"machine_id": "M1", "blade_type": "X"},
            {"machine_id": "M2", "blade_type": "Y"},
        ]

        assert map_machine_blades(rows) == {"M1": "X", "M2": "Y"}

    def test_blade_assignments_use_type_key(self):
        rows = [{"machine_id": "M1", "blade_type": "X", "count": 3}]

        assert map_blade_assignments(rows) == {"M1": {"type": "X", "count": 3}}

    def test_blade_assignment_missing_count_is_zero(self):
        rows = [{"machine_id": "M1", "blade_type": "X", "count": None}]

        assert map_blade_assignments(rows)["M1"]["count"] == 0

    def test_machine_status(self):
        rows = [
            {"machine_id": "M1", "status": "running"},
            {"machine_id": "M2", "status": "stopped"},
        ]

        assert map_machine_status(rows) == {"M1": "running", "M2": "stopped"}


def test_count_or_zero():
    assert count_or_zero(None) == 0
    assert count_or_zero(0) == 0
    assert count_or_zero(12) == 12
