# app/routers/profiles.py
from fastapi import APIRouter, Depends, status

from app.core.auth import require_admin, require_auth
from app.core.profile_cache import ProfileCache
from app.database import new_session
from app.repositories.profile_repo import ProfileRepository, RoleRepository
from app.schemas.profile import ProfileRead, ResolutionRead
from app.services.profile_resolver import ProfileResolver

router = APIRouter(prefix="/profiles", tags=["Profiles"])

# One cache per process, shared by every request.
cache = ProfileCache()
resolver = ProfileResolver(
    cache,
    ProfileRepository(),
    RoleRepository(),
    session_factory=new_session,
)


def get_resolver() -> ProfileResolver:
    """FastAPI dependency; override in tests."""
    return resolver


@router.delete(
    "/cache",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def clear_profile_cache(resolver: ProfileResolver = Depends(get_resolver)):
    """
    Drop every cached resolution (admin only).

    Use after editing profiles or roles; the cache never expires on its own.
    """
    resolver.cache.clear()


@router.get(
    "/{identifier}",
    response_model=ResolutionRead,
    dependencies=[Depends(require_auth)],
)
async def resolve_profile(
    identifier: str,
    resolver: ProfileResolver = Depends(get_resolver),
):
    """
    Resolve a staff identifier (auth UUID or login id) to profile + role.

    Unknown identifiers return `profile: null, role: "staff"` with 200.
    """
    resolution = await resolver.aresolve(identifier)
    profile = (
        ProfileRead.model_validate(resolution.profile)
        if resolution.profile is not None
        else None
    )
    return ResolutionRead(profile=profile, role=resolution.role)
