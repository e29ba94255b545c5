# app/services/account_eraser.py
import logging
import uuid
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from app.core.auth_gateway import RemovalStatus, SupabaseAuthGateway
from app.core.errors import AccountEraserError, ErrorKind
from app.models.workspace import (
    ActivityLog,
    Announcement,
    Lead,
    Leave,
    Project,
    Task,
)
from app.repositories.cleanup_repo import CleanupRepository
from app.repositories.profile_repo import RoleRepository
from app.schemas.account import DeleteUserResult

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class CleanupTask:
    """Rows of `model` whose `match_field` holds the deleted user's id."""

    collection: str
    model: type[SQLModel]
    match_field: str


# Tables without an FK to auth.users; profiles and user_roles are
# removed by ON DELETE CASCADE once the auth user is gone.
CLEANUP_TASKS: tuple[CleanupTask, ...] = (
    CleanupTask("leads", Lead, "created_by"),
    CleanupTask("tasks", Task, "assigned_to"),
    CleanupTask("leaves", Leave, "user_id"),
    CleanupTask("projects", Project, "created_by"),
    CleanupTask("announcements", Announcement, "created_by"),
    CleanupTask("activity_logs", ActivityLog, "user_id"),
)


class AccountEraser:
    """
    Admin-only deletion of an auth user and everything that references it.

    Flow (linear, no retries):
      1. caller token present and valid        -> else UNAUTHENTICATED
      2. caller has role "admin"               -> else FORBIDDEN
      3. target user id present                -> else INVALID_REQUEST
      4. best-effort delete of dependent rows  (failures logged, skipped)
      5. delete the auth user                  -> not found counts as done,
                                                  other errors DELETION_FAILED

    There is no transaction across steps 4 and 5: rows removed in step 4
    stay removed even if step 5 fails.
    """

    def __init__(
        self,
        role_repo: RoleRepository,
        cleanup_repo: CleanupRepository,
        tasks: tuple[CleanupTask, ...] = CLEANUP_TASKS,
    ):
        self.role_repo = role_repo
        self.cleanup_repo = cleanup_repo
        self.tasks = tasks

    def delete_account(
        self,
        session: Session,
        auth: SupabaseAuthGateway,
        caller_token: str | None,
        target_account_id: str | None,
    ) -> DeleteUserResult:
        """Authorize the caller, then erase the target account."""
        self.authorize(session, auth, caller_token)
        return self.erase(session, auth, target_account_id)

    def authorize(
        self,
        session: Session,
        auth: SupabaseAuthGateway,
        caller_token: str | None,
    ) -> str:
        """
        Check that the token belongs to an admin.

        Returns:
            The caller's account id.

        Raises:
            AccountEraserError(UNAUTHENTICATED | FORBIDDEN)
        """
        if not caller_token:
            raise AccountEraserError(ErrorKind.UNAUTHENTICATED, "No authorization header")

        caller = auth.verify_token(caller_token)
        if not caller.is_found:
            raise AccountEraserError(ErrorKind.UNAUTHENTICATED, "Invalid token")

        role = self.role_repo.get_role(session, uuid.UUID(caller.value))
        if not role.is_found or role.value != ADMIN_ROLE:
            raise AccountEraserError(ErrorKind.FORBIDDEN, "Only admins can delete users")

        return caller.value

    def erase(
        self,
        session: Session,
        auth: SupabaseAuthGateway,
        target_account_id: str | None,
    ) -> DeleteUserResult:
        """
        Remove dependent rows, then the auth user itself.

        Must only be called after `authorize`.
        """
        if not target_account_id or not isinstance(target_account_id, str):
            raise AccountEraserError(ErrorKind.INVALID_REQUEST, "User ID is required")

        logger.info("Deleting user %s and all related data...", target_account_id)
        failed = self.remove_dependents(session, target_account_id)
        if failed:
            logger.warning(
                "Cleanup for user %s left rows in: %s",
                target_account_id,
                ", ".join(failed),
            )

        logger.info(
            "All related data deleted for user %s, now deleting auth user...",
            target_account_id,
        )
        removal = auth.delete_account(target_account_id)

        if removal.status is RemovalStatus.DELETED:
            return DeleteUserResult(success=True)

        if removal.status is RemovalStatus.NOT_FOUND:
            logger.info(
                "User %s already deleted or not found, treating as success",
                target_account_id,
            )
            return DeleteUserResult(success=True, alreadyDeleted=True)

        raise AccountEraserError(
            ErrorKind.DELETION_FAILED,
            removal.detail or "Failed to delete user",
        )

    def remove_dependents(self, session: Session, account_id: str) -> list[str]:
        """
        Run every cleanup task; a failing task does not stop the others.

        Returns:
            Names of the collections whose cleanup failed.
        """
        failed: list[str] = []
        for task in self.tasks:
            try:
                deleted = self.cleanup_repo.delete_referencing(
                    session, task.model, task.match_field, account_id
                )
            except SQLAlchemyError as e:
                session.rollback()
                logger.warning("Error deleting %s: %s", task.collection, e)
                failed.append(task.collection)
                continue
            logger.debug("Deleted %d row(s) from %s", deleted, task.collection)
        return failed
