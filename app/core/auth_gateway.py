# app/core/auth_gateway.py
from dataclasses import dataclass
from enum import Enum

from supabase import AuthError, Client

from app.core.lookup import Lookup
from app.core.supabase_client import supabase_admin


class RemovalStatus(str, Enum):
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class AccountRemoval:
    """Outcome of an admin account deletion."""

    status: RemovalStatus
    detail: str | None = None


def _is_not_found(exc: AuthError) -> bool:
    """
    Supabase reports a missing user either with the `user_not_found`
    error code (newer GoTrue) or only in the message ("User not found").
    """
    if getattr(exc, "code", None) == "user_not_found":
        return True
    return "not found" in (exc.message or "").lower()


class SupabaseAuthGateway:
    """
    Narrow adapter over Supabase Auth (service role client).

    Responsibilities:
      - verify a caller's access token
      - delete an account through the admin API
      - translate AuthError into tagged results

    Transport errors other than AuthError are not translated: they
    propagate to the caller's catch-all boundary.
    """

    def __init__(self, client: Client):
        self.client = client

    def verify_token(self, token: str) -> Lookup[str]:
        """
        Resolve an access token to the caller's account id.

        Returns:
            found(<account uuid>) | error(<message>)
        """
        try:
            response = self.client.auth.get_user(token)
        except AuthError as e:
            return Lookup.error(e.message)

        user = response.user if response else None
        if user is None:
            return Lookup.error("Invalid token")
        return Lookup.found(str(user.id))

    def delete_account(self, account_id: str) -> AccountRemoval:
        """Delete an auth user; a missing user is reported, not raised."""
        try:
            self.client.auth.admin.delete_user(account_id)
        except AuthError as e:
            if _is_not_found(e):
                return AccountRemoval(RemovalStatus.NOT_FOUND, e.message)
            return AccountRemoval(RemovalStatus.ERROR, e.message)
        return AccountRemoval(RemovalStatus.DELETED)


def get_auth_gateway() -> SupabaseAuthGateway:
    """FastAPI dependency; override in tests."""
    return SupabaseAuthGateway(supabase_admin())
