# blogclient/schemas/content.py
import json
import uuid
from datetime import datetime
from typing import Any

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


def _not_empty(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty")
    return v


def _optional_text(v: str | None) -> str | None:
    """Blank optional text is stored as NULL."""
    if v is None:
        return v
    v = v.strip()
    return v or None


def _parse_reference(v: Any) -> Any:
    """
    References are free-form JSON.

    A string is parsed as JSON text (as typed in the editor); blank
    strings mean "no reference".
    """
    if isinstance(v, str):
        if not v.strip():
            return None
        try:
            return json.loads(v)
        except json.JSONDecodeError as exc:
            raise ValueError("reference must be valid JSON format") from exc
    return v


class BlogPostRead(SQLModel):
    """Blog post representation for the UI."""

    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    sub_title: str | None = None
    body: str
    image: str | None = None
    reference: Any | None = None
    created_at: datetime
    updated_at: datetime | None = None


class BlogPostCreate(SQLModel):
    """
    Payload for creating a post.

    - title and body are required and stripped
    - sub_title / image are optional; blank means NULL
    - reference accepts JSON values or JSON text
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=255)
    sub_title: str | None = Field(default=None, max_length=255)
    body: str
    image: str | None = None
    reference: Any | None = None

    @field_validator("title", "body")
    @classmethod
    def validate_required(cls, v: str) -> str:
        return _not_empty(v)

    @field_validator("sub_title", "image")
    @classmethod
    def validate_optional(cls, v: str | None) -> str | None:
        return _optional_text(v)

    @field_validator("reference", mode="before")
    @classmethod
    def validate_reference(cls, v: Any) -> Any:
        return _parse_reference(v)


class BlogPostUpdate(SQLModel):
    """
    Partial update payload for posts.
    All fields are optional.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=255)
    sub_title: str | None = Field(default=None, max_length=255)
    body: str | None = None
    image: str | None = None
    reference: Any | None = None

    @field_validator("title", "body")
    @classmethod
    def validate_required(cls, v: str | None) -> str | None:
        return _not_empty(v)

    @field_validator("reference", mode="before")
    @classmethod
    def validate_reference(cls, v: Any) -> Any:
        return _parse_reference(v)
