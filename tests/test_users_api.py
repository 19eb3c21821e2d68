"""
User directory endpoint tests
"""

import pytest

from database.connection import DatabaseError, DatabaseErrorKind
from services.users_service import CREATE_USER_SQL


class TestCreateUser:

    @pytest.mark.asyncio
    async def test_create_returns_server_assigned_fields(self, client):
        response = await client.post("/api/users", json={"name": "Ann", "email": "ann@x.com"})

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 1
        assert body["name"] == "Ann"
        assert body["email"] == "ann@x.com"
        assert body["created_at"]

    @pytest.mark.asyncio
    async def test_created_user_is_readable(self, client):
        created = (await client.post("/api/users", json={"name": "Ann", "email": "ann@x.com"})).json()

        listed = await client.get("/api/users")
        fetched = await client.get(f"/api/users/{created['id']}")

        assert listed.status_code == 200
        assert created in listed.json()
        assert fetched.status_code == 200
        assert fetched.json() == created

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, client):
        first = await client.post("/api/users", json={"name": "Ann", "email": "ann@x.com"})
        second = await client.post("/api/users", json={"name": "Annie", "email": "ann@x.com"})

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json() == {"error": "User already exists", "message": "Email already registered"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"email": "ann@x.com"},
        {"name": "Ann"},
        {"name": "", "email": "ann@x.com"},
        {"name": "Ann", "email": ""},
        {"name": None, "email": "ann@x.com"},
        {},
    ])
    async def test_missing_fields_rejected_without_insert(self, client, fake_db, payload):
        before = (await client.get("/api/users")).json()

        response = await client.post("/api/users", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"
        assert fake_db.count(CREATE_USER_SQL) == 0
        assert (await client.get("/api/users")).json() == before

    @pytest.mark.asyncio
    async def test_malformed_body_is_validation_error(self, client, fake_db):
        response = await client.post(
            "/api/users",
            content=b"{not json",
            headers={"content-type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"
        assert fake_db.count(CREATE_USER_SQL) == 0

    @pytest.mark.asyncio
    async def test_form_body_is_not_accepted(self, client, fake_db):
        response = await client.post("/api/users", data={"name": "Ann", "email": "ann@x.com"})

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"
        assert fake_db.count(CREATE_USER_SQL) == 0

    @pytest.mark.asyncio
    async def test_values_are_stored_as_received(self, client):
        response = await client.post("/api/users", json={"name": " ", "email": " ann@x.com"})

        assert response.status_code == 201
        assert response.json()["name"] == " "
        assert response.json()["email"] == " ann@x.com"

    @pytest.mark.asyncio
    async def test_untrimmed_email_is_distinct(self, client):
        first = await client.post("/api/users", json={"name": "Ann", "email": "ann@x.com"})
        second = await client.post("/api/users", json={"name": "Ann", "email": " ann@x.com"})

        assert first.status_code == 201
        assert second.status_code == 201
        assert second.json()["id"] != first.json()["id"]

    @pytest.mark.asyncio
    async def test_database_failure_is_server_error(self, client, fake_db):
        fake_db.failure = DatabaseError(DatabaseErrorKind.QUERY, 'relation "users" does not exist')

        response = await client.post("/api/users", json={"name": "Ann", "email": "ann@x.com"})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to create user"
        assert response.json()["message"] == 'relation "users" does not exist'


class TestReadUsers:

    @pytest.mark.asyncio
    async def test_empty_directory(self, client):
        response = await client.get("/api/users")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_follows_insertion_order(self, client):
        await client.post("/api/users", json={"name": "Ann", "email": "ann@x.com"})
        await client.post("/api/users", json={"name": "Bo", "email": "bo@x.com"})

        users = (await client.get("/api/users")).json()

        assert [(user["id"], user["name"]) for user in users] == [(1, "Ann"), (2, "Bo")]

    @pytest.mark.asyncio
    async def test_list_is_sorted_by_id(self, client, fake_db):
        for user_id, name in [(3, "Cy"), (1, "Ann"), (2, "Bo")]:
            fake_db.rows.append({"id": user_id, "name": name, "email": f"{name.lower()}@x.com", "created_at": None})

        ids = [user["id"] for user in (await client.get("/api/users")).json()]

        assert ids == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, client):
        response = await client.get("/api/users/999")

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    @pytest.mark.asyncio
    async def test_id_is_bound_as_parameter(self, client, fake_db):
        await client.get("/api/users/1;DROP TABLE users")

        statement, params = fake_db.statements[-1]
        assert "DROP" not in statement
        assert params == ("1;DROP TABLE users",)

    @pytest.mark.asyncio
    async def test_list_failure_reports_message(self, client, fake_db):
        fake_db.unavailable = True

        response = await client.get("/api/users")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to fetch users"
        assert body["message"] == "connect ECONNREFUSED 127.0.0.1:5432"
        assert body["trace_id"]

    @pytest.mark.asyncio
    async def test_get_failure_reports_message(self, client):
        response = await client.get("/api/users/abc")

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to fetch user"
        assert "invalid input syntax" in response.json()["message"]
