# app/models/holiday.py
import uuid
import datetime as dt

from sqlmodel import SQLModel, Field


class Holiday(SQLModel, table=True):
    """
    Company holiday / announcement shown on the staff calendar.

    created_by stores the creator's display name (not a user id), so
    holidays survive the deletion of the admin who posted them.
    """

    __tablename__ = "holidays"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    title: str = Field(
        max_length=200,
        description="Holiday name",
    )

    date: dt.date = Field(
        index=True,
        description="Day of the holiday",
    )

    message: str | None = Field(
        default=None,
        description="Optional description or greeting",
    )

    image_url: str | None = Field(
        default=None,
        description="Public URL of the holiday image (Supabase Storage or external)",
    )

    created_by: str = Field(
        default="Admin",
        max_length=100,
        description="Display name of the admin who created it",
    )

    created_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: dt.datetime | None = Field(
        default=None,
        description="Last edit timestamp (UTC)",
    )
