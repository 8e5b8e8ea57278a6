"""
User Database Operations - Single Source of Truth for User CRUD

Handles:
- Authentication (username + password)
- Registration with username uniqueness enforced by the users table
- Listing, lookup, partial update and deletion by username

Usage:
    queries = UserQueries(postgres_adapter, AuthManager.from_settings(settings))

    user = await queries.register(UserRegistration(
        username="abe", password="secret1", firstName="Abe",
        lastName="L", email="a@b.com", isAdmin=False,
    ))
    user = await queries.authenticate("abe", "secret1")
    user = await queries.update("abe", {"firstName": "Abraham"})
    await queries.remove("abe")
"""

import logging
from typing import Any, List, Mapping, Union

import asyncpg
from argon2.exceptions import HashingError

from backend.auth.manager import AuthManager
from backend.database.sql_helpers import sql_for_partial_update
from backend.models import User, UserDetail, UserRegistration, UserUpdate
from src.exceptions import BadRequestError, NotFoundError, StorageError, UnauthorizedError

logger = logging.getLogger(__name__)

# Updatable fields: external name -> column name
USER_UPDATE_COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "password": "password",
    "email": "email",
    "isAdmin": "is_admin",
}

# Public projection; never includes the password hash
USER_PROJECTION = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)

INVALID_CREDENTIALS = "Invalid username/password"


class UserQueries:
    """
    User repository over the users table.

    Stateless apart from its collaborators: safe to share between
    concurrent coroutines. All queries use parameterized SQL.
    """

    def __init__(self, db, auth_manager: AuthManager):
        """
        Initialize user queries.

        Args:
            db: Query-execution facility (src.storage.PostgresAdapter or compatible)
            auth_manager: Password hasher configured with the work factor
        """
        self.db = db
        self.auth_manager = auth_manager

    # =========================================================================
    # Authentication
    # =========================================================================

    async def authenticate(self, username: str, password: str) -> User:
        """
        Authenticate user with username and password.

        Returns:
            User without the password hash

        Raises:
            UnauthorizedError: If the user does not exist or the password is
                wrong (same message in both cases)
        """
        row = await self.db.fetchrow(
            f"""
            SELECT password,
                   {USER_PROJECTION}
            FROM users
            WHERE username = $1
            """,
            username
        )

        if row:
            stored_hash = row.pop("password")
            if await self.auth_manager.verify_password_async(password, stored_hash):
                if self.auth_manager.needs_rehash(stored_hash):
                    await self._rehash_password(username, password)
                return User.model_validate(row)

        logger.warning(f"Failed login attempt for user: {username}")
        raise UnauthorizedError(INVALID_CREDENTIALS)

    async def _rehash_password(self, username: str, password: str) -> None:
        """Store a hash made with the current parameters (non-critical)."""
        try:
            new_hash = await self.auth_manager.hash_password_async(password)
            await self.db.execute(
                "UPDATE users SET password = $1 WHERE username = $2",
                new_hash,
                username
            )
            logger.info(f"Rehashed password for user {username}")
        except (
            asyncpg.PostgresError,
            asyncpg.InterfaceError,
            OSError,
            StorageError,
            HashingError,
        ) as e:
            # Login still succeeds; the old hash stays valid
            logger.warning(
                f"Failed to rehash password for user {username}: {e.__class__.__name__}",
                extra={"username": username, "error_type": e.__class__.__name__}
            )

    # =========================================================================
    # User Creation
    # =========================================================================

    async def register(self, data: Union[UserRegistration, Mapping[str, Any]]) -> User:
        """
        Register user with data.

        Args:
            data: username, password, firstName, lastName, email, isAdmin

        Returns:
            Created user (without the password hash)

        Raises:
            BadRequestError: If the username is already taken
        """
        if not isinstance(data, UserRegistration):
            data = UserRegistration.model_validate(data)

        hashed_password = await self.auth_manager.hash_password_async(data.password)

        try:
            row = await self.db.fetchrow(
                f"""
                INSERT INTO users
                    (username, password, first_name, last_name, email, is_admin)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {USER_PROJECTION}
                """,
                data.username,
                hashed_password,
                data.first_name,
                data.last_name,
                data.email,
                data.is_admin
            )
        except asyncpg.UniqueViolationError as e:
            logger.warning(f"Failed to register user: username {data.username} already exists")
            raise BadRequestError(
                f"Duplicate username: {data.username}",
                details={"username": data.username},
                cause=e
            ) from e

        logger.info(f"Registered user {data.username}")
        return User.model_validate(row)

    # =========================================================================
    # User Lookup
    # =========================================================================

    async def find_all(self) -> List[User]:
        """
        Find all users, ordered by username.

        Returns:
            List of users (empty list when there are none)
        """
        rows = await self.db.fetch(
            f"""
            SELECT {USER_PROJECTION}
            FROM users
            ORDER BY username
            """
        )
        return [User.model_validate(row) for row in rows]

    async def get(self, username: str) -> UserDetail:
        """
        Given a username, return data about user.

        Raises:
            NotFoundError: If user is not found
        """
        row = await self.db.fetchrow(
            f"""
            SELECT {USER_PROJECTION},
                   users.id
            FROM users
            WHERE username = $1
            """,
            username
        )

        if not row:
            raise NotFoundError(f"No user: {username}")

        return UserDetail.model_validate(row)

    # =========================================================================
    # User Updates
    # =========================================================================

    async def update(self, username: str, data: Union[UserUpdate, Mapping[str, Any]]) -> User:
        """
        Update user data with `data`.

        This is a "partial update": only the provided fields change.
        Data can include: firstName, lastName, password, email, isAdmin

        WARNING: This can set a new password or make a user an admin.
        Callers must validate inputs before calling it.

        Returns:
            Updated user (without the password hash)

        Raises:
            ValueError: If no fields were supplied
            NotFoundError: If user is not found
        """
        if not isinstance(data, UserUpdate):
            data = UserUpdate.model_validate(data)

        changes = data.changes()
        if "password" in changes:
            changes["password"] = await self.auth_manager.hash_password_async(changes["password"])

        update = sql_for_partial_update(changes, USER_UPDATE_COLUMNS)

        row = await self.db.fetchrow(
            f"""
            UPDATE users
            SET {update.set_cols}
            WHERE username = {update.placeholder}
            RETURNING {USER_PROJECTION}
            """,
            *update.values,
            username
        )

        if not row:
            raise NotFoundError(f"No user: {username}")

        logger.info(
            f"Updated user {username}",
            extra={"fields": sorted(changes)}
        )
        return User.model_validate(row)

    # =========================================================================
    # User Deletion
    # =========================================================================

    async def remove(self, username: str) -> None:
        """
        Delete given user from database.

        Raises:
            NotFoundError: If user is not found
        """
        row = await self.db.fetchrow(
            """
            DELETE FROM users
            WHERE username = $1
            RETURNING username
            """,
            username
        )

        if not row:
            raise NotFoundError(f"No user: {username}")

        logger.info(f"Deleted user {username}")
