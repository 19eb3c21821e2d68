"""
pytest configuration and fixtures for the user directory test suite
The API runs in-process over httpx's ASGI transport against a fake database.
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

import httpx
import pytest
import pytest_asyncio

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("ENVIRONMENT", "development")

from app import create_app
from api.routes.health import HEALTH_QUERY
from database.connection import DatabaseError, DatabaseErrorKind
from services.users_service import CREATE_USER_SQL, GET_USER_SQL, LIST_USERS_SQL


class FakeDatabase:
    """In-memory stand-in for Database that understands the service's statements"""

    def __init__(self) -> None:
        self.rows: List[Dict[str, Any]] = []
        self.next_id = 1
        self.statements: List[tuple] = []
        self.unavailable = False
        self.failure = None
        self.connected = False
        self.closed = False
        self.schema_initialized = False

    @property
    def is_configured(self) -> bool:
        return True

    async def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.closed = True

    async def init_schema(self) -> None:
        self.schema_initialized = True

    async def query(self, statement: str, *params: Any) -> List[Dict[str, Any]]:
        self.statements.append((statement, params))
        if self.unavailable:
            raise DatabaseError(DatabaseErrorKind.UNAVAILABLE, "connect ECONNREFUSED 127.0.0.1:5432")
        if self.failure is not None:
            raise self.failure

        if statement == HEALTH_QUERY:
            return [{"timestamp": datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)}]
        if statement == LIST_USERS_SQL:
            return [dict(row) for row in sorted(self.rows, key=lambda row: row["id"])]
        if statement == GET_USER_SQL:
            try:
                user_id = int(params[0])
            except ValueError:
                raise DatabaseError(
                    DatabaseErrorKind.QUERY,
                    f'invalid input syntax for type integer: "{params[0]}"'
                )
            return [dict(row) for row in self.rows if row["id"] == user_id]
        if statement == CREATE_USER_SQL:
            name, email = params
            if any(row["email"] == email for row in self.rows):
                raise DatabaseError(
                    DatabaseErrorKind.CONFLICT,
                    'duplicate key value violates unique constraint "users_email_key"'
                )
            row = {
                "id": self.next_id,
                "name": name,
                "email": email,
                "created_at": datetime(2024, 5, 1, 12, 0, self.next_id % 60),
            }
            self.next_id += 1
            self.rows.append(row)
            return [dict(row)]
        raise AssertionError(f"Unexpected statement: {statement}")

    def count(self, statement: str) -> int:
        return sum(1 for executed, _ in self.statements if executed == statement)


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def api_app(fake_db):
    return create_app(database=fake_db)


@pytest_asyncio.fixture
async def client(api_app):
    transport = httpx.ASGITransport(app=api_app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
