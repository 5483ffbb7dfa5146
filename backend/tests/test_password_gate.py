"""
Blade Stock Backend — Stock Password Gate Tests
=================================================

check_stock_password() is tested directly; the HTTP behavior (403 before any
storage access) is covered through the test client.
"""

import pytest

from bladestock.exceptions import AuthorizationError
from bladestock.middleware.password_gate import check_stock_password

PASSWORD = "2255"


class TestCheckStockPassword:
    def test_matching_password_passes(self):
        check_stock_password("2255", "2255")

    def test_numeric_password_does_not_match_its_text_form(self):
        with pytest.raises(AuthorizationError) as exc_info:
            check_stock_password(2255, "2255")
        assert exc_info.value.message == "Incorrect password"

    @pytest.mark.parametrize("supplied", [None, "", 0, False])
    def test_missing_password(self, supplied):
        with pytest.raises(AuthorizationError) as exc_info:
            check_stock_password(supplied, "2255")
        assert exc_info.value.message == "Password is required"

    def test_wrong_password(self):
        with pytest.raises(AuthorizationError) as exc_info:
            check_stock_password("wrong", "2255")
        assert exc_info.value.message == "Incorrect password"


class TestPasswordGateEndpoints:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path, body",
        [
            ("/api/inventory", {"group_name": "A", "blade_type": "X", "fixed": 1, "available": 1}),
            ("/api/logs", {"machine_name": "M1", "blade_type": "X", "action": "install"}),
            ("/api/machine-blades", {"machine_id": "M1", "blade_type": "X"}),
            ("/api/blade-assignments", {"machine_id": "M1", "blade_type": "X", "count": 2}),
            ("/api/machine-status", {"machine_id": "M1", "status": "running"}),
            ("/api/reset", {}),
        ],
    )
    async def test_wrong_password_is_forbidden(self, test_client, path, body):
        response = await test_client.post(path, json={**body, "password": "wrong"})

        assert response.status_code == 403
        assert response.json()["message"] == "Incorrect password"

    @pytest.mark.asyncio
    async def test_missing_password_is_forbidden(self, test_client):
        response = await test_client.post(
            "/api/machine-status", json={"machine_id": "M1", "status": "running"}
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Password is required"

    @pytest.mark.asyncio
    async def test_non_object_body_counts_as_missing_password(self, test_client):
        response = await test_client.post("/api/inventory", json=["2255"])

        assert response.status_code == 403
        assert response.json()["message"] == "Password is required"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", ["wrong", None])
    async def test_rejected_inventory_write_keeps_counts(self, test_client, password):
        await test_client.post(
            "/api/inventory",
            json={"group_name": "A", "blade_type": "X", "fixed": 5, "available": 5, "password": PASSWORD},
        )

        response = await test_client.post(
            "/api/inventory",
            json={"group_name": "A", "blade_type": "X", "fixed": 0, "available": 0, "password": password},
        )
        data = (await test_client.get("/api/data")).json()

        assert response.status_code == 403
        assert data["inventory"] == {"A": {"X": {"fixed": 5, "available": 5}}}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", ["wrong", None])
    async def test_rejected_log_append_adds_nothing(self, test_client, password):
        response = await test_client.post(
            "/api/logs",
            json={"machine_name": "M1", "blade_type": "X", "action": "install", "password": password},
        )
        data = (await test_client.get("/api/data")).json()

        assert response.status_code == 403
        assert data["logs"] == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", ["wrong", None])
    async def test_rejected_status_write_keeps_status(self, test_client, password):
        await test_client.post(
            "/api/machine-status",
            json={"machine_id": "M1", "status": "idle", "password": PASSWORD},
        )

        response = await test_client.post(
            "/api/machine-status",
            json={"machine_id": "M1", "status": "running", "password": password},
        )
        data = (await test_client.get("/api/data")).json()

        assert response.status_code == 403
        assert data["machineStatus"] == {"M1": "idle"}

    @pytest.mark.asyncio
    async def test_delete_without_password_keeps_entry(self, test_client):
        created = await test_client.post(
            "/api/logs",
            json={"machine_name": "M1", "blade_type": "X", "action": "install", "password": PASSWORD},
        )
        log_id = created.json()["id"]

        response = await test_client.request("DELETE", f"/api/logs/{log_id}")
        data = (await test_client.get("/api/data")).json()

        assert response.status_code == 403
        assert [entry["id"] for entry in data["logs"]] == [log_id]

    @pytest.mark.asyncio
    async def test_delete_with_wrong_password_keeps_entry(self, test_client):
        created = await test_client.post(
            "/api/logs",
            json={"machine_name": "M1", "blade_type": "X", "action": "install", "password": PASSWORD},
        )
        log_id = created.json()["id"]

        response = await test_client.request(
            "DELETE", f"/api/logs/{log_id}", json={"password": "wrong"}
        )
        data = (await test_client.get("/api/data")).json()

        assert response.status_code == 403
        assert response.json()["message"] == "Incorrect password"
        assert [entry["id"] for entry in data["logs"]] == [log_id]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", [2255, 0, False])
    async def test_non_string_password_is_forbidden(self, test_client, password):
        response = await test_client.post(
            "/api/machine-status",
            json={"machine_id": "M1", "status": "running", "password": password},
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_password_is_not_echoed(self, test_client):
        response = await test_client.post(
            "/api/machine-blades",
            json={"machine_id": "M1", "blade_type": "X", "password": PASSWORD},
        )

        assert response.status_code == 200
        assert "password" not in response.json()
