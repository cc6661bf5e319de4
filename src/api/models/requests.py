"""Pydantic request bodies for API endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from models.events import Category


class RequestSubmission(BaseModel):
    """Guest request form."""

    title: str = Field(min_length=1)
    date: date
    category: Category
    floor: int = Field(ge=1, le=6)
    room: str = Field(min_length=1)
    description: str = ""
    submitted_by: str | None = None


def to_local_naive(value: datetime | None) -> datetime | None:
    """Convert an offset-aware datetime to naive local time; naive values pass through."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class EventCreate(BaseModel):
    title: str = Field(min_length=1)
    start: datetime
    end: datetime
    category: Category
    floor: int = Field(ge=1, le=6)
    room: str = Field(min_length=1)
    description: str | None = None

    @field_validator("start", "end")
    @classmethod
    def strip_timezone(cls, value: datetime) -> datetime:
        return to_local_naive(value)


class EventUpdate(BaseModel):
    """Partial event edit; omitted fields are left unchanged."""

    title: str | None = Field(default=None, min_length=1)
    start: datetime | None = None
    end: datetime | None = None
    category: Category | None = None
    floor: int | None = Field(default=None, ge=1, le=6)
    room: str | None = Field(default=None, min_length=1)
    description: str | None = None

    @field_validator("start", "end")
    @classmethod
    def strip_timezone(cls, value: datetime | None) -> datetime | None:
        return to_local_naive(value)


class LoginRequest(BaseModel):
    passphrase: str


class AssistantQuery(BaseModel):
    query: str = Field(min_length=1, max_length=2000)
