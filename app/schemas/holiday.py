# app/schemas/holiday.py
import datetime as dt
import uuid

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


def _clean_title(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("title cannot be empty")
    return v


def _blank_to_none(v: str | None) -> str | None:
    # The calendar form sends "" for untouched optional fields
    if v is None:
        return v
    v = v.strip()
    return v or None


class HolidayCreate(SQLModel):
    """
    Payload for adding a holiday (admin only).

    created_by is filled from the caller's profile, never from the body.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=200)
    date: dt.date
    message: str | None = None
    image_url: str | None = None

    @field_validator("title")
    @classmethod
    def normalize_title(cls, v: str) -> str:
        return _clean_title(v)

    @field_validator("message", "image_url")
    @classmethod
    def normalize_optional(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


class HolidayUpdate(SQLModel):
    """
    Partial update; omitted fields are left unchanged.

    Sending "" or null for message / image_url clears it.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=200)
    date: dt.date | None = None
    message: str | None = None
    image_url: str | None = None

    @field_validator("title")
    @classmethod
    def normalize_title(cls, v: str | None) -> str | None:
        return _clean_title(v)

    @field_validator("message", "image_url")
    @classmethod
    def normalize_optional(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


class HolidayRead(SQLModel):
    """Response schema returned to clients."""

    id: uuid.UUID
    title: str
    date: dt.date
    message: str | None = None
    image_url: str | None = None
    created_by: str
    created_at: dt.datetime
    updated_at: dt.datetime | None = None
