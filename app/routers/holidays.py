# app/routers/holidays.py
import datetime as dt
import uuid

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlmodel import Session

from app.core.auth import CurrentUser, require_admin, require_auth
from app.database import get_session
from app.repositories.holiday_repo import HolidayRepository
from app.schemas.holiday import HolidayCreate, HolidayRead, HolidayUpdate
from app.services.holiday_service import HolidayService

router = APIRouter(prefix="/holidays", tags=["Holidays"])

repo = HolidayRepository()
service = HolidayService(repo)


# -------- Staff endpoints --------


@router.get(
    "",
    response_model=list[HolidayRead],
    dependencies=[Depends(require_auth)],
)
def list_holidays(
    session: Session = Depends(get_session),
    on: dt.date | None = None,
):
    """
    List holidays ordered by date.

    - `on=YYYY-MM-DD` restricts the list to that day.
    """
    return service.list_holidays(session, on=on)


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=HolidayRead,
    status_code=status.HTTP_201_CREATED,
)
def create_holiday(
    payload: HolidayCreate,
    session: Session = Depends(get_session),
    current_user: CurrentUser = Depends(require_admin),
):
    """
    Add a holiday (admin only).

    `created_by` is set to the admin's profile name, or "Admin" when the
    admin has no profile.
    """
    created_by = current_user.name if current_user.has_profile else None
    return service.create_holiday(session, payload, created_by=created_by)


@router.patch(
    "/{holiday_id}",
    response_model=HolidayRead,
    dependencies=[Depends(require_admin)],
)
def update_holiday(
    holiday_id: uuid.UUID,
    payload: HolidayUpdate,
    session: Session = Depends(get_session),
):
    """Partial update of a holiday (admin only)."""
    return service.update_holiday(session, holiday_id, payload)


@router.delete(
    "/{holiday_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_holiday(
    holiday_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """Delete a holiday and its stored image (admin only)."""
    service.delete_holiday(session, holiday_id)
    return None


@router.post(
    "/{holiday_id}/image",
    response_model=HolidayRead,
    dependencies=[Depends(require_admin)],
    summary="Upload or replace the image of a holiday",
)
def upload_holiday_image(
    holiday_id: uuid.UUID,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
):
    """
    Upload or replace the holiday image (admin only).

    Accepts JPEG, PNG, WEBP or GIF up to 5MB.
    """
    if not file.content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing content-type for uploaded file",
        )

    file_bytes = file.file.read()
    return service.set_image(
        session=session,
        holiday_id=holiday_id,
        content_type=file.content_type,
        file_bytes=file_bytes,
    )
