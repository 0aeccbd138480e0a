# blogclient/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Account record for the blog platform.

    Identity:
      - id: generated UUID
      - email: unique, stored exactly as entered (case-sensitive)

    Credentials:
      - password_digest: SHA-256 hex digest, never the plaintext.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    email: str = Field(
        unique=True,
        index=True,
        max_length=255,
    )

    password_digest: str = Field(
        max_length=64,
        description="SHA-256 hex digest of the password",
    )

    full_name: str = Field(max_length=200)

    gender: str | None = Field(default=None, max_length=20)

    age: int | None = Field(default=None, ge=0)

    # Application role; only EDITOR exists today
    role: str = Field(
        default="EDITOR",
        index=True,
        description="Application role: EDITOR",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last update timestamp (UTC)",
    )
