# app/schemas/profile.py
import uuid

from pydantic import ConfigDict
from sqlmodel import SQLModel


class ProfileRead(SQLModel):
    """Public profile fields shown on a staff chip / hover card."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: str | None = None
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    status: str


class ResolutionRead(SQLModel):
    """
    Result of resolving an identifier.

    profile is null when no profile matches; role then is "staff".
    """

    profile: ProfileRead | None = None
    role: str
