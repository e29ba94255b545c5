# app/models/profile.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Profile(SQLModel, table=True):
    """
    Staff profile, one per Supabase auth user.

    Identity:
      - id: matches Supabase auth.users.id (UUID)
      - user_id: human login id (e.g. "EMP-042"); optional, may differ
        from the UUID

    Profiles are removed by ON DELETE CASCADE when the auth user is
    deleted; this backend never deletes them directly.
    """

    __tablename__ = "profiles"

    id: uuid.UUID = Field(
        primary_key=True,
        index=True,
        description="Matches Supabase auth.users.id",
    )

    user_id: str | None = Field(
        default=None,
        index=True,
        max_length=100,
        description="Human-readable login id",
    )

    name: str = Field(
        max_length=100,
        description="Display name",
    )

    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None)

    status: str = Field(
        default="active",
        max_length=20,
        description="active | inactive | ...",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )


class UserRole(SQLModel, table=True):
    """
    Application role of an auth user.

    At most one row per user; no row means "staff".
    """

    __tablename__ = "user_roles"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
    )

    user_id: uuid.UUID = Field(
        unique=True,
        index=True,
        description="Supabase auth.users.id",
    )

    role: str = Field(
        default="staff",
        max_length=20,
        description="admin | manager | staff",
    )
