# app/core/auth.py
import uuid
from dataclasses import dataclass
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from app.core.config import get_settings
from app.database import get_session
from app.repositories.profile_repo import ProfileRepository, RoleRepository

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately,
#   require_auth turns it into a 401 with our own message.
bearer_scheme = HTTPBearer(auto_error=False)

profile_repo = ProfileRepository()
role_repo = RoleRepository()


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated caller as seen by route handlers."""

    id: uuid.UUID
    email: str | None
    name: str
    role: str
    has_profile: bool = False


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a Supabase access token (JWT).

    Verification:
      - signature (HS256 using SUPABASE_JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified (Supabase 'aud' may vary)

    Args:
        token: raw JWT from the Authorization header.

    Returns:
        Decoded JWT claims.

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def _default_name_from_email(email: str | None) -> str:
    """
    Display name for users whose profile row does not exist (yet).
    """
    if not email:
        return "Unknown"
    if "@" in email:
        return email.split("@", 1)[0]
    return email


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> CurrentUser | None:
    """
    Resolve the current user from a Supabase JWT.

    Flow:
      1. If no Authorization header => return None.
      2. Decode JWT => extract 'sub' (auth user id) and 'email'.
      3. Convert 'sub' to UUID to match Profile.id type.
      4. Load profile (display name) and role from the database.
         No role row => "staff".

    Returns:
        CurrentUser if a token was sent, else None.

    Raises:
        HTTPException(401): if token is malformed or missing required claims.
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    sub = payload.get("sub")
    email = payload.get("email")

    if not sub:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing sub",
        )

    # Supabase provides sub as a string; enforce UUID
    try:
        sub_uuid = uuid.UUID(sub)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )

    profile = profile_repo.get_by_id(session, sub_uuid)
    role = role_repo.get_role(session, sub_uuid)

    name = profile.value.name if profile.is_found else _default_name_from_email(email)
    return CurrentUser(
        id=sub_uuid,
        email=email,
        name=name,
        role=role.value if role.is_found and role.value else "staff",
        has_profile=profile.is_found,
    )


def require_auth(user: CurrentUser | None = Depends(get_current_user)) -> CurrentUser:
    """
    Enforce authentication.

    If attached to a route, anonymous callers will be rejected with 401.

    Returns:
        The authenticated CurrentUser.

    Raises:
        HTTPException(401): if user is None.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user


def require_admin(user: CurrentUser = Depends(require_auth)) -> CurrentUser:
    """
    Enforce admin role.

    Route is accessible only if:
      - user.role == "admin"

    Raises:
        HTTPException(403): if role is not admin.
    """
    if user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user
