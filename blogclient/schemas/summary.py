# blogclient/schemas/summary.py
from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class SummaryRequest(SQLModel):
    """Body sent to the summarization backend."""

    model_config = ConfigDict(extra="forbid")

    text: str
    num_sentences: int = Field(default=3, ge=1, le=20)

    @field_validator("text")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("text cannot be empty")
        return v


class SummaryResponse(SQLModel):
    """Payload returned by the summarization backend."""

    summary: str
