# app/repositories/holiday_repo.py
import datetime as dt
import uuid

from sqlmodel import Session, select

from app.models.holiday import Holiday


class HolidayRepository:
    """
    Data access layer for Holiday.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    def get_by_id(self, session: Session, holiday_id: uuid.UUID) -> Holiday | None:
        """Return a Holiday by primary key, or None if not found."""
        return session.get(Holiday, holiday_id)

    def list(self, session: Session, on: dt.date | None = None) -> list[Holiday]:
        """
        All holidays, earliest first.

        Args:
            on: if given, only holidays falling on that day
        """
        stmt = select(Holiday)
        if on is not None:
            stmt = stmt.where(Holiday.date == on)
        stmt = stmt.order_by(Holiday.date, Holiday.created_at)
        return list(session.exec(stmt).all())

    def create(self, session: Session, holiday: Holiday) -> Holiday:
        """Insert a new Holiday and return the persisted row."""
        session.add(holiday)
        session.commit()
        session.refresh(holiday)
        return holiday

    def update(self, session: Session, holiday: Holiday) -> Holiday:
        """Persist changes to an existing Holiday."""
        session.add(holiday)
        session.commit()
        session.refresh(holiday)
        return holiday

    def delete(self, session: Session, holiday: Holiday) -> None:
        """Delete a Holiday."""
        session.delete(holiday)
        session.commit()
