"""
In-memory stand-in for the users table.

FakeUsersDB answers the handful of statements UserQueries issues with the
same row shapes PostgreSQL would return, so repository behaviour can be
tested end to end without a database.
"""

import re
from typing import Any, Dict, List, Optional

import asyncpg
import pytest

from backend.auth.manager import AuthManager
from backend.database.user_queries import UserQueries

_SET_COL = re.compile(r'"(\w+)"=\$(\d+)')
_WHERE_PARAM = re.compile(r"WHERE username = \$(\d+)")

_ALIASES = {
    "first_name": "firstName",
    "last_name": "lastName",
    "is_admin": "isAdmin",
}


class FakeUsersDB:
    """Implements fetch/fetchrow/execute over a dict keyed by username."""

    def __init__(self):
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.statements: List[str] = []
        self._next_id = 1

    def _public(self, row: Dict[str, Any], with_password: bool = False, with_id: bool = False) -> Dict[str, Any]:
        out = {}
        if with_password:
            out["password"] = row["password"]
        for col in ("username", "first_name", "last_name", "email", "is_admin"):
            out[_ALIASES.get(col, col)] = row[col]
        if with_id:
            out["id"] = row["id"]
        return out

    async def fetch(self, sql: str, *args: Any) -> List[Dict[str, Any]]:
        self.statements.append(sql)
        assert "ORDER BY username" in sql
        return [self._public(self.rows[name]) for name in sorted(self.rows)]

    async def fetchrow(self, sql: str, *args: Any) -> Optional[Dict[str, Any]]:
        self.statements.append(sql)
        statement = " ".join(sql.split())

        if statement.startswith("SELECT password"):
            row = self.rows.get(args[0])
            return self._public(row, with_password=True) if row else None

        if statement.startswith("SELECT"):
            row = self.rows.get(args[0])
            return self._public(row, with_id=True) if row else None

        if statement.startswith("INSERT INTO users"):
            username, password, first_name, last_name, email, is_admin = args
            if username in self.rows:
                raise asyncpg.UniqueViolationError(
                    'duplicate key value violates unique constraint "users_pkey"'
                )
            self.rows[username] = {
                "id": self._next_id,
                "username": username,
                "password": password,
                "first_name": first_name,
                "last_name": last_name,
                "email": email,
                "is_admin": is_admin,
            }
            self._next_id += 1
            return self._public(self.rows[username])

        if statement.startswith("UPDATE users"):
            username = args[int(_WHERE_PARAM.search(statement).group(1)) - 1]
            row = self.rows.get(username)
            if row is None:
                return None
            for column, idx in _SET_COL.findall(statement):
                row[column] = args[int(idx) - 1]
            return self._public(row)

        if statement.startswith("DELETE FROM users"):
            row = self.rows.pop(args[0], None)
            return {"username": row["username"]} if row else None

        raise AssertionError(f"Unexpected statement: {statement}")

    async def execute(self, sql: str, *args: Any) -> str:
        self.statements.append(sql)
        statement = " ".join(sql.split())
        assert statement.startswith("UPDATE users SET password = $1")
        new_hash, username = args
        if username not in self.rows:
            return "UPDATE 0"
        self.rows[username]["password"] = new_hash
        return "UPDATE 1"


@pytest.fixture
def auth_manager():
    return AuthManager(work_factor=1, memory_cost=1024, parallelism=1)


@pytest.fixture
def fake_db():
    return FakeUsersDB()


@pytest.fixture
def queries(fake_db, auth_manager):
    return UserQueries(fake_db, auth_manager)


@pytest.fixture
def abe():
    return {
        "username": "abe",
        "password": "secret1",
        "firstName": "Abe",
        "lastName": "L",
        "email": "a@b.com",
        "isAdmin": False,
    }
