# blogclient/repositories/session_repo.py
import uuid
from datetime import datetime, timezone

from supabase import AsyncClient

from blogclient.core.errors import StoreReadFailure, StoreWriteFailure
from blogclient.repositories.base import parse_row, run_query
from blogclient.schemas.session import ActiveSession, SessionRecord
from blogclient.schemas.user import UserRecord

TABLE = "sessions"


class SessionRepository:
    """
    Data access layer for login sessions.

    Sessions are never deleted; logout stamps logout_time and expiry is
    decided by comparing expired_at with the current time on read.
    """

    def __init__(self, client: AsyncClient):
        self.client = client

    def _table(self):
        return self.client.table(TABLE)

    async def create(self, session: SessionRecord) -> SessionRecord:
        """Insert a new session row and return it."""
        rows = await run_query(
            self._table().insert(session.model_dump(mode="json")),
            StoreWriteFailure,
            "Create session",
        )
        if not rows:
            raise StoreWriteFailure("Create session failed: no row returned")
        return parse_row(SessionRecord, rows[0], StoreWriteFailure, "Create session")

    async def get_active(
        self,
        token: str,
        now: datetime | None = None,
    ) -> ActiveSession | None:
        """
        Return the session for `token` joined with its user, but only if
        it is still valid: logout_time IS NULL and expired_at > now.

        Expired, logged out and unknown tokens all return None.
        """
        now = now or datetime.now(timezone.utc)
        rows = await run_query(
            self._table()
            .select("*, users(*)")
            .eq("token", token)
            .is_("logout_time", "null")
            .gt("expired_at", now.isoformat())
            .limit(1),
            StoreReadFailure,
            "Validate session",
        )
        if not rows:
            return None

        row = dict(rows[0])
        user_row = row.pop("users", None)
        if not user_row:
            return None
        record = parse_row(SessionRecord, row, StoreReadFailure, "Validate session")
        if not record.is_valid(now):
            return None
        user = parse_row(UserRecord, user_row, StoreReadFailure, "Validate session").stripped()
        return ActiveSession(**record.model_dump(), user=user)

    async def stamp_logout(self, token: str, when: datetime | None = None) -> bool:
        """
        Set logout_time on an active session.

        Only rows whose logout_time is still NULL are touched, so calling
        this twice keeps the first timestamp.

        Returns:
            True if a row was stamped, False if it was already logged out
            or unknown.
        """
        when = when or datetime.now(timezone.utc)
        rows = await run_query(
            self._table()
            .update({"logout_time": when.isoformat()})
            .eq("token", token)
            .is_("logout_time", "null"),
            StoreWriteFailure,
            "Stamp logout",
        )
        return bool(rows)

    async def list_for_user(self, user_id: uuid.UUID, limit: int = 20) -> list[SessionRecord]:
        """Most recent sessions of a user, newest first."""
        rows = await run_query(
            self._table()
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit),
            StoreReadFailure,
            "List sessions",
        )
        return [parse_row(SessionRecord, row, StoreReadFailure, "List sessions") for row in rows]
