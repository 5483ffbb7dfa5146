"""
Blade Stock Backend — Row Transformers
========================================

What:  Pure functions that fold flat table rows into the keyed mappings the
       frontend reads from GET /api/data.
How:   Each function takes an ordered sequence of mappings (SQLAlchemy
       RowMapping objects or plain dicts) and returns a new dict. No I/O,
       no database types, no shared state.

    inventory rows          → {group_name: {blade_type: {fixed, available}}}
    machine_blades rows     → {machine_id: blade_type}
    blade_assignments rows  → {machine_id: {type, count}}
    machine_status rows     → {machine_id: status}

Absent or NULL counts become 0. When two rows share a key, the later row wins.
"""

from typing import Any, Callable, Dict, Hashable, Iterable, Mapping, Optional

Row = Mapping[str, Any]


def count_or_zero(value: Optional[int]) -> int:
    """Treats a missing count as zero."""
    return 0 if value is None else value


def fold_two_level(
    records: Iterable[Row],
    outer_key: str,
    inner_key: str,
    value: Callable[[Row], Any],
) -> Dict[Hashable, Dict[Hashable, Any]]:
    """
    Fold records into a two-level mapping keyed by two of their fields.

    The outer mapping for a key is created on first sight, so records with
    different outer keys never share an inner mapping.

    Example:
        >>> rows = [{"g": "A", "t": "X", "n": 1}, {"g": "B", "t": "X", "n": 2}]
        >>> fold_two_level(rows, "g", "t", lambda r: r["n"])
        {'A': {'X': 1}, 'B': {'X': 2}}
    """
    nested: Dict[Hashable, Dict[Hashable, Any]] = {}
    for record in records:
        group = nested.setdefault(record.get(outer_key), {})
        group[record.get(inner_key)] = value(record)
    return nested


def nest_inventory(rows: Iterable[Row]) -> Dict[str, Dict[str, Dict[str, int]]]:
    return fold_two_level(
        rows,
        "group_name",
        "blade_type",
        lambda row: {
            "fixed": count_or_zero(row.get("fixed")),
            "available": count_or_zero(row.get("available")),
        },
    )


def map_machine_blades(rows: Iterable[Row]) -> Dict[str, Optional[str]]:
    return {row.get("machine_id"): row.get("blade_type") for row in rows}


def map_blade_assignments(rows: Iterable[Row]) -> Dict[str, Dict[str, Any]]:
    # The frontend reads the blade type of an assignment as "type".
    return {
        row.get("machine_id"): {
            "type": row.get("blade_type"),
            "count": count_or_zero(row.get("count")),
        }
        for row in rows
    }


def map_machine_status(rows: Iterable[Row]) -> Dict[str, Optional[str]]:
    return {row.get("machine_id"): row.get("status") for row in rows}
