"""
Exercise Tracker — API Endpoint Tests
=======================================

What:  End-to-end tests of the HTTP contract through the FastAPI app.
How:   HTTPX AsyncClient over ASGITransport; in-memory SQLite behind it.
       Bodies are sent as form data, like the HTML forms on the landing page.
"""

import uuid
from datetime import datetime, timezone

import pytest


async def _create_user(client, username="fcc_test"):
    response = await client.post("/api/users", data={"username": username})
    assert response.status_code == 200
    return response.json()


async def _add_exercise(client, user_id, **fields):
    return await client.post(f"/api/users/{user_id}/exercises", data=fields)


class TestUsersEndpoints:

    @pytest.mark.asyncio
    async def test_create_user(self, test_client):
        body = await _create_user(test_client)

        assert body["username"] == "fcc_test"
        assert body["_id"]
        assert set(body) == {"_id", "username"}

    @pytest.mark.asyncio
    async def test_empty_username_kept_as_empty_string(self, test_client):
        response = await test_client.post("/api/users", data={"username": ""})

        assert response.status_code == 200
        assert response.json()["username"] == ""

    @pytest.mark.asyncio
    async def test_missing_username_stored_as_null(self, test_client):
        response = await test_client.post("/api/users", data={})

        assert response.status_code == 200
        assert response.json()["username"] is None

    @pytest.mark.asyncio
    async def test_list_users_includes_new_user_once(self, test_client):
        created = await _create_user(test_client)
        await _create_user(test_client, "another")

        response = await test_client.get("/api/users")

        assert response.status_code == 200
        users = response.json()
        assert isinstance(users, list)
        assert [u["_id"] for u in users].count(created["_id"]) == 1
        assert all(set(u) == {"_id", "username"} for u in users)

    @pytest.mark.asyncio
    async def test_cors_allows_any_origin(self, test_client):
        response = await test_client.get(
            "/api/users", headers={"Origin": "https://example.org"},
        )

        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_response_carries_request_id(self, test_client):
        response = await test_client.get("/api/users", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"


class TestExercisesEndpoint:

    @pytest.mark.asyncio
    async def test_add_exercise_defaults_date_to_today(self, test_client):
        user = await _create_user(test_client)

        response = await _add_exercise(test_client, user["_id"], description="run", duration="30")

        assert response.status_code == 200
        body = response.json()
        assert body == {
            "_id": user["_id"],
            "username": "fcc_test",
            "description": "run",
            "duration": 30,
            "date": datetime.now(timezone.utc).strftime("%a %b %d %Y"),
        }

    @pytest.mark.asyncio
    async def test_add_exercise_with_date(self, test_client):
        user = await _create_user(test_client)

        response = await _add_exercise(
            test_client, user["_id"], description="run", duration="30", date="2023-01-15",
        )

        assert response.status_code == 200
        assert response.json()["date"] == "Sun Jan 15 2023"

    @pytest.mark.asyncio
    async def test_fractional_duration_round_trips(self, test_client):
        user = await _create_user(test_client)

        response = await _add_exercise(test_client, user["_id"], description="walk", duration="30.5")

        assert response.status_code == 200
        assert response.json()["duration"] == 30.5

    @pytest.mark.asyncio
    async def test_whole_duration_serialized_as_integer(self, test_client):
        user = await _create_user(test_client)

        response = await _add_exercise(test_client, user["_id"], description="run", duration="30")

        assert '"duration":30,' in response.text

    @pytest.mark.asyncio
    async def test_huge_duration_is_not_a_server_error(self, test_client):
        user = await _create_user(test_client)

        response = await _add_exercise(
            test_client, user["_id"], description="run", duration="99999999999999999999",
        )

        assert response.status_code == 200
        assert response.json()["duration"] == 10**20

    @pytest.mark.asyncio
    async def test_non_finite_duration_rejected(self, test_client):
        user = await _create_user(test_client)

        response = await _add_exercise(test_client, user["_id"], description="run", duration="1e400")

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "duration"

    @pytest.mark.asyncio
    async def test_bare_hex_user_id_rejected(self, test_client):
        response = await _add_exercise(test_client, uuid.uuid4().hex, description="run", duration="30")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_user_id(self, test_client):
        response = await _add_exercise(test_client, "not-an-id", description="run", duration="30")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"] == "Invalid user ID"

    @pytest.mark.asyncio
    async def test_unknown_user(self, test_client):
        response = await _add_exercise(
            test_client, str(uuid.uuid4()), description="run", duration="30",
        )

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fields,missing", [
        ({"duration": "30"}, "description"),
        ({"description": "run"}, "duration"),
        ({"description": "run", "duration": "half an hour"}, "duration"),
    ])
    async def test_missing_or_bad_fields(self, test_client, fields, missing):
        user = await _create_user(test_client)

        response = await _add_exercise(test_client, user["_id"], **fields)

        assert response.status_code == 400
        assert response.json()["details"]["field"] == missing


class TestLogsEndpoint:

    async def _user_with_dates(self, client, dates):
        user = await _create_user(client)
        for day in dates:
            response = await _add_exercise(
                client, user["_id"], description="run", duration="30", date=day,
            )
            assert response.status_code == 200
        return user

    @pytest.mark.asyncio
    async def test_date_range_filter(self, test_client):
        user = await self._user_with_dates(
            test_client, ["2022-12-31", "2023-01-01", "2023-01-20", "2023-01-31", "2023-02-01"],
        )

        response = await test_client.get(
            f"/api/users/{user['_id']}/logs", params={"from": "2023-01-01", "to": "2023-01-31"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["_id"] == user["_id"]
        assert body["username"] == "fcc_test"
        assert [entry["date"] for entry in body["log"]] == [
            "Sun Jan 01 2023",
            "Fri Jan 20 2023",
            "Tue Jan 31 2023",
        ]
        assert body["count"] == len(body["log"]) == 3

    @pytest.mark.asyncio
    async def test_limit(self, test_client):
        user = await self._user_with_dates(test_client, ["2023-01-01", "2023-01-02"])

        response = await test_client.get(f"/api/users/{user['_id']}/logs", params={"limit": "1"})

        assert response.status_code == 200
        assert len(response.json()["log"]) == 1
        assert response.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_range_and_limit_together(self, test_client):
        user = await self._user_with_dates(
            test_client, ["2022-12-31", "2023-01-05", "2023-01-10", "2023-01-15", "2023-02-01"],
        )

        response = await test_client.get(
            f"/api/users/{user['_id']}/logs",
            params={"from": "2023-01-01", "to": "2023-01-31", "limit": "2"},
        )

        assert response.status_code == 200
        body = response.json()
        assert [entry["date"] for entry in body["log"]] == ["Thu Jan 05 2023", "Tue Jan 10 2023"]
        assert body["count"] == 2

    @pytest.mark.asyncio
    async def test_oversized_limit_returns_everything(self, test_client):
        user = await self._user_with_dates(test_client, ["2023-01-01", "2023-01-02"])

        response = await test_client.get(
            f"/api/users/{user['_id']}/logs", params={"limit": "99999999999999999999"},
        )

        assert response.status_code == 200
        assert response.json()["count"] == 2

    @pytest.mark.asyncio
    async def test_last_representable_to_bound(self, test_client):
        user = await self._user_with_dates(test_client, ["2023-01-01"])

        response = await test_client.get(
            f"/api/users/{user['_id']}/logs", params={"to": "9999-12-31"},
        )

        assert response.status_code == 200
        assert response.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_invalid_to_names_field(self, test_client):
        user = await _create_user(test_client)

        response = await test_client.get(
            f"/api/users/{user['_id']}/logs", params={"to": "2023-13-01"},
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "to"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", ["-5", "abc"])
    async def test_invalid_limit_returns_everything(self, test_client, limit):
        user = await self._user_with_dates(test_client, ["2023-01-01", "2023-01-02"])

        response = await test_client.get(f"/api/users/{user['_id']}/logs", params={"limit": limit})

        assert response.status_code == 200
        assert response.json()["count"] == 2

    @pytest.mark.asyncio
    async def test_unknown_user(self, test_client):
        response = await test_client.get(f"/api/users/{uuid.uuid4()}/logs")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_user_id(self, test_client):
        response = await test_client.get("/api/users/not-an-id/logs")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_from_names_field(self, test_client):
        user = await _create_user(test_client)

        response = await test_client.get(
            f"/api/users/{user['_id']}/logs", params={"from": "not-a-date"},
        )

        assert response.status_code == 400
        body = response.json()
        assert "from" in body["message"]
        assert body["details"]["field"] == "from"

    @pytest.mark.asyncio
    async def test_round_trip(self, test_client):
        user = await _create_user(test_client)
        created = (await _add_exercise(
            test_client, user["_id"], description="swim", duration="45", date="2023-03-05",
        )).json()

        body = (await test_client.get(f"/api/users/{user['_id']}/logs")).json()

        assert body["log"] == [{
            "description": created["description"],
            "duration": created["duration"],
            "date": created["date"],
        }]


class TestPagesAndHealth:

    @pytest.mark.asyncio
    async def test_index_page(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Exercise tracker" in response.text

    @pytest.mark.asyncio
    async def test_stylesheet(self, test_client):
        response = await test_client.get("/public/style.css")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
