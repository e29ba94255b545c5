# app/repositories/profile_repo.py
import uuid

from sqlalchemy.exc import MultipleResultsFound, NoResultFound, SQLAlchemyError
from sqlmodel import Session, select

from app.core.lookup import Lookup
from app.models.profile import Profile, UserRole


def _one(session: Session, stmt) -> Lookup:
    """
    Run a "zero or one row" query and tag the outcome.

    Zero rows and ambiguous (multiple) rows are both NOT_FOUND: callers
    only act on a single unambiguous match. Any other database failure
    is ERROR.
    """
    try:
        return Lookup.found(session.exec(stmt).one())
    except (NoResultFound, MultipleResultsFound):
        return Lookup.not_found()
    except SQLAlchemyError as e:
        return Lookup.error(str(e))


class ProfileRepository:
    """
    Data access layer for Profile.

    Responsibilities:
      - Pure DB reads, returned as tagged Lookup results
      - No FastAPI, no HTTP, no business logic
    """

    def get_by_id(self, session: Session, profile_id: uuid.UUID) -> Lookup[Profile]:
        """Lookup by primary key (= auth user id)."""
        return _one(session, select(Profile).where(Profile.id == profile_id))

    def get_by_login_id(self, session: Session, login_id: str) -> Lookup[Profile]:
        """Lookup by the human-readable login id (profiles.user_id)."""
        return _one(session, select(Profile).where(Profile.user_id == login_id))


class RoleRepository:
    """Data access layer for UserRole."""

    def get_role(self, session: Session, user_id: uuid.UUID) -> Lookup[str]:
        """Return the role label of a user; NOT_FOUND when no row exists."""
        return _one(session, select(UserRole.role).where(UserRole.user_id == user_id))

