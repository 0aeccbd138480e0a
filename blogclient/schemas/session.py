# blogclient/schemas/session.py
import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import field_validator
from sqlmodel import SQLModel

from blogclient.schemas.user import UserRead


class SessionRecord(SQLModel):
    """A sessions row as returned by the record store."""

    token: str
    user_id: uuid.UUID
    created_at: datetime
    expired_at: datetime
    logout_time: datetime | None = None
    device_info: dict[str, Any] = {}

    @field_validator("created_at", "expired_at", "logout_time")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        # "timestamp without time zone" columns come back naive
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    def is_valid(self, now: datetime | None = None) -> bool:
        """Active iff never logged out and not yet expired."""
        now = now or datetime.now(timezone.utc)
        return self.logout_time is None and now < self.expired_at


class ActiveSession(SessionRecord):
    """A valid session joined with its (stripped) owning user."""

    user: UserRead


class AuthResult(SQLModel):
    """Returned by login / register."""

    user: UserRead
    token: str


class RestoreResult(SQLModel):
    """Returned by restore at application start."""

    authenticated: bool
    user: UserRead | None = None


class LocalSessionSnapshot(SQLModel):
    """What the device keeps between restarts: token + stripped user."""

    auth_token: str
    user_data: UserRead
