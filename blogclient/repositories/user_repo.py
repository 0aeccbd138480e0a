# blogclient/repositories/user_repo.py
import uuid
from datetime import datetime, timezone
from typing import Any

from postgrest.exceptions import APIError
from supabase import AsyncClient

from blogclient.core.errors import DuplicateEmail, StoreReadFailure, StoreWriteFailure
from blogclient.repositories.base import UNIQUE_VIOLATION, parse_row, run_query
from blogclient.schemas.user import UserRecord

TABLE = "users"


class UserRepository:
    """
    Data access layer for users.

    Responsibilities:
      - Pure record store operations (lookup, insert, update, delete)
      - Map raw rows to UserRecord; no business logic
    """

    def __init__(self, client: AsyncClient):
        self.client = client

    def _table(self):
        return self.client.table(TABLE)

    # ----- Lookups -----

    async def get_by_id(self, user_id: uuid.UUID) -> UserRecord | None:
        """Return a user by primary key, or None if not found."""
        rows = await run_query(
            self._table().select("*").eq("id", str(user_id)).limit(1),
            StoreReadFailure,
            "Load user",
        )
        return parse_row(UserRecord, rows[0], StoreReadFailure, "Load user") if rows else None

    async def get_by_email(self, email: str) -> UserRecord | None:
        """Return a user by unique email (exact match), or None."""
        rows = await run_query(
            self._table().select("*").eq("email", email).limit(1),
            StoreReadFailure,
            "Find user by email",
        )
        return parse_row(UserRecord, rows[0], StoreReadFailure, "Find user by email") if rows else None

    # ----- Writes -----

    async def create(
        self,
        *,
        email: str,
        password_digest: str,
        full_name: str,
        gender: str | None = None,
        age: int | None = None,
        role: str = "EDITOR",
    ) -> UserRecord:
        """
        Insert a new user and return the stored row.

        Raises:
            DuplicateEmail: if the unique email constraint rejects the row.
            StoreWriteFailure: on any other store error.
        """
        row = {
            "email": email,
            "password_digest": password_digest,
            "full_name": full_name,
            "gender": gender,
            "age": age,
            "role": role,
        }
        try:
            rows = await run_query(
                self._table().insert(row), StoreWriteFailure, "Create user"
            )
        except StoreWriteFailure as exc:
            cause = exc.__cause__
            if isinstance(cause, APIError) and cause.code == UNIQUE_VIOLATION:
                raise DuplicateEmail() from cause
            raise
        if not rows:
            raise StoreWriteFailure("Create user failed: no row returned")
        return parse_row(UserRecord, rows[0], StoreWriteFailure, "Create user")

    async def update(self, user_id: uuid.UUID, changes: dict[str, Any]) -> UserRecord:
        """
        Apply a partial update and return the updated row.

        updated_at is always stamped.

        Raises:
            StoreWriteFailure: on store error or if the user no longer exists.
        """
        changes = {**changes, "updated_at": datetime.now(timezone.utc).isoformat()}
        rows = await run_query(
            self._table().update(changes).eq("id", str(user_id)),
            StoreWriteFailure,
            "Update user",
        )
        if not rows:
            raise StoreWriteFailure("Update user failed: user not found")
        return parse_row(UserRecord, rows[0], StoreWriteFailure, "Update user")

    async def delete(self, user_id: uuid.UUID) -> None:
        """Delete a user row (only used to undo a half-finished registration)."""
        await run_query(
            self._table().delete().eq("id", str(user_id)),
            StoreWriteFailure,
            "Delete user",
        )
