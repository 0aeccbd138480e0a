# blogclient/models/content.py
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field


class BlogPost(SQLModel, table=True):
    """
    Blog post authored by a user.

    Matches ERD:
      - id, user_id, title, sub_title, body, image, reference,
        created_at, updated_at
    """

    __tablename__ = "content"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
        description="FK to users.id (author)",
    )

    title: str = Field(max_length=255)

    sub_title: str | None = Field(default=None, max_length=255)

    body: str

    # Base64 encoded image picked on the device
    image: str | None = Field(default=None)

    reference: Any | None = Field(
        default=None,
        sa_column=Column(JSON, nullable=True),
        description="Free-form JSON references",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
