# app/repositories/cleanup_repo.py
import uuid

from sqlalchemy import delete
from sqlmodel import Session, SQLModel


class CleanupRepository:
    """
    Bulk deletes of rows that reference an auth user.

    Raises SQLAlchemyError on database failure; the caller decides
    whether a failed step is fatal.
    """

    def delete_referencing(
        self,
        session: Session,
        model: type[SQLModel],
        match_field: str,
        account_id: str,
    ) -> int:
        """
        Delete every row of `model` whose `match_field` equals `account_id`.

        Returns:
            Number of deleted rows. A non-UUID account id cannot be
            referenced by any row, so it deletes nothing.
        """
        try:
            value = uuid.UUID(account_id)
        except ValueError:
            return 0

        column = getattr(model, match_field)
        result = session.exec(delete(model).where(column == value))
        session.commit()
        return result.rowcount
