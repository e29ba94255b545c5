# app/services/holiday_service.py
import datetime as dt
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.storage_utils import (
    upload_to_storage,
    delete_public_url,
    generate_filename,
)
from app.models.holiday import Holiday
from app.repositories.holiday_repo import HolidayRepository
from app.schemas.holiday import HolidayCreate, HolidayUpdate

logger = logging.getLogger(__name__)


# --- Image config ---

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per image

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}

DEFAULT_CREATED_BY = "Admin"


class HolidayService:
    """
    Business logic for the holiday calendar.

    Responsibilities:
      - CRUD with created_by / updated_at bookkeeping
      - image validation and upload/delete orchestration with Supabase
      - admin-only writes (enforced at router via require_admin)
    """

    def __init__(self, repo: HolidayRepository):
        self.repo = repo

    # ----- Helpers -----

    @staticmethod
    def _validate_and_get_ext(content_type: str, file_bytes: bytes) -> str:
        if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Please select an image file (JPEG, PNG, WEBP or GIF).",
            )

        if len(file_bytes) > MAX_IMAGE_BYTES:
            raise HTTPException(
                status_code=status.HTTP_413_CONTENT_TOO_LARGE,
                detail="Image too large (max 5MB).",
            )

        return ALLOWED_IMAGE_CONTENT_TYPES[content_type]

    @staticmethod
    def _discard_image(image_url: str) -> None:
        """Remove a stored image; a storage failure only leaves an orphaned object."""
        try:
            delete_public_url(image_url)
        except Exception as e:
            logger.warning("Error deleting image %s: %s", image_url, e)

    # ----- Holidays -----

    def list_holidays(self, session: Session, on: dt.date | None = None) -> list[Holiday]:
        return self.repo.list(session, on=on)

    def get_holiday(self, session: Session, holiday_id: uuid.UUID) -> Holiday:
        holiday = self.repo.get_by_id(session, holiday_id)
        if not holiday:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Holiday not found",
            )
        return holiday

    def create_holiday(
        self,
        session: Session,
        payload: HolidayCreate,
        created_by: str | None,
    ) -> Holiday:
        """
        Add a holiday.

        created_by is the admin's display name; "Admin" when unknown.
        """
        holiday = Holiday(
            title=payload.title,
            date=payload.date,
            message=payload.message,
            image_url=payload.image_url,
            created_by=(created_by or "").strip() or DEFAULT_CREATED_BY,
        )
        return self.repo.create(session, holiday)

    def update_holiday(
        self,
        session: Session,
        holiday_id: uuid.UUID,
        payload: HolidayUpdate,
    ) -> Holiday:
        """
        Partial update of a holiday; always stamps updated_at.

        title and date cannot be cleared.
        """
        holiday = self.get_holiday(session, holiday_id)
        changes = payload.model_dump(exclude_unset=True)

        if changes.get("title") is not None:
            holiday.title = changes["title"]

        if changes.get("date") is not None:
            holiday.date = changes["date"]

        if "message" in changes:
            holiday.message = changes["message"]

        if "image_url" in changes:
            holiday.image_url = changes["image_url"]

        holiday.updated_at = dt.datetime.now(dt.timezone.utc)
        return self.repo.update(session, holiday)

    def delete_holiday(self, session: Session, holiday_id: uuid.UUID) -> None:
        """Delete a holiday and its stored image (if it lives in our bucket)."""
        holiday = self.get_holiday(session, holiday_id)

        if holiday.image_url:
            self._discard_image(holiday.image_url)

        self.repo.delete(session, holiday)

    # ----- Image -----

    def set_image(
        self,
        session: Session,
        holiday_id: uuid.UUID,
        content_type: str,
        file_bytes: bytes,
    ) -> Holiday:
        """
        Upload or replace the image of a holiday.

        - Validates content type + size.
        - Deletes the previous image from Storage if present (a failure is
          logged, the upload still goes ahead).
        - Stores under holidays/<holiday_id>/<uuid>.<ext> so browsers never
          serve a cached copy of the old image.
        """
        holiday = self.get_holiday(session, holiday_id)
        ext = self._validate_and_get_ext(content_type, file_bytes)

        if holiday.image_url:
            self._discard_image(holiday.image_url)

        path = f"holidays/{holiday.id}/{generate_filename(ext)}"
        holiday.image_url = upload_to_storage(path, file_bytes, content_type)
        holiday.updated_at = dt.datetime.now(dt.timezone.utc)

        return self.repo.update(session, holiday)
