# blogclient/models/session.py
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field


class UserSession(SQLModel, table=True):
    """
    One login instance.

    Valid while logout_time is NULL and now < expired_at. Rows are never
    deleted; expiry is evaluated at read time.
    """

    __tablename__ = "sessions"

    # Random 256-bit hex token; UNIQUE backs up the generator's entropy
    token: str = Field(
        primary_key=True,
        max_length=128,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
        description="FK to users.id",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    expired_at: datetime = Field(index=True)

    logout_time: datetime | None = Field(default=None)

    device_info: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
    )
