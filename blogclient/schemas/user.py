# blogclient/schemas/user.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

# App-level roles. Only editors exist today.
Role = Literal["EDITOR"]


def _normalize_name(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("full_name cannot be empty")
    return v


class UserRead(SQLModel):
    """
    Stripped user: everything except the password digest.

    This is the only user shape that leaves the repository layer, is
    cached on the device and is shown to the UI.
    """

    id: uuid.UUID
    email: str
    full_name: str
    gender: str | None = None
    age: int | None = None
    role: str = "EDITOR"
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserRecord(UserRead):
    """
    Full users row including the password digest.

    Only the Session Manager sees this, to compare digests.
    """

    password_digest: str

    def stripped(self) -> UserRead:
        """Return the user without the password digest."""
        return UserRead.model_validate(self.model_dump(exclude={"password_digest"}))


class UserCreate(SQLModel):
    """
    Registration payload.

    Validation rules:
      - email is stripped and must contain "@"; case is preserved
      - full_name cannot be empty or whitespace
      - password must not be empty
    """

    model_config = ConfigDict(extra="forbid")

    full_name: str = Field(max_length=200)
    email: str = Field(max_length=255)
    password: str = Field(min_length=1)
    gender: str | None = Field(default=None, max_length=20)
    age: int | None = Field(default=None, ge=0, le=150)
    role: Role = "EDITOR"

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v

    @field_validator("full_name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return _normalize_name(v)


class UserUpdate(SQLModel):
    """
    Partial profile update for the logged in user.

    email, role and password are not editable here.
    """

    model_config = ConfigDict(extra="forbid")

    full_name: str | None = Field(default=None, max_length=200)
    gender: str | None = Field(default=None, max_length=20)
    age: int | None = Field(default=None, ge=0, le=150)

    @field_validator("full_name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        return _normalize_name(v)
