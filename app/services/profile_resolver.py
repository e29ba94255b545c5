# app/services/profile_resolver.py
import asyncio
import logging
import re
import uuid
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.profile_cache import ProfileCache, Resolution
from app.repositories.profile_repo import ProfileRepository, RoleRepository

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "staff"

# RFC 4122 versions 1-5, any case
UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def is_uuid(value: str) -> bool:
    return UUID_PATTERN.fullmatch(value) is not None


class ProfileResolver:
    """
    Resolve a staff identifier to (profile, role), memoised.

    An identifier is either the auth UUID (profiles.id) or the human
    login id (profiles.user_id). Results are cached under every alias of
    the profile, so looking up the same person by the other id is free.

    Rules:
      - empty identifier -> (None, "staff"), no query, not cached
      - lookup failures are logged and degrade to (None | profile, "staff");
        they are never raised to the caller
      - concurrent misses for the same identifier may both query the DB
    """

    def __init__(
        self,
        cache: ProfileCache,
        profile_repo: ProfileRepository,
        role_repo: RoleRepository,
        session_factory: Callable[[], Session],
    ):
        self.cache = cache
        self.profile_repo = profile_repo
        self.role_repo = role_repo
        self.session_factory = session_factory

    def resolve(self, identifier: str) -> Resolution:
        if not identifier:
            return Resolution(profile=None, role=DEFAULT_ROLE)

        cached = self.cache.get(identifier)
        if cached is not None:
            return cached

        try:
            with self.session_factory() as session:
                resolution = self._lookup(session, identifier)
        except SQLAlchemyError as e:
            logger.error("Error fetching profile %r: %s", identifier, e)
            return Resolution(profile=None, role=DEFAULT_ROLE)

        self._remember(identifier, resolution)
        return resolution

    async def aresolve(self, identifier: str) -> Resolution:
        """
        Async variant for request handlers.

        The lookup runs in the default executor behind asyncio.shield: if
        the awaiting task is cancelled (client went away), the caller gets
        CancelledError and never sees the result, while the lookup itself
        still finishes and fills the cache.
        """
        if not identifier or identifier in self.cache:
            return self.resolve(identifier)

        loop = asyncio.get_running_loop()
        lookup = loop.run_in_executor(None, self.resolve, identifier)
        return await asyncio.shield(lookup)

    def _lookup(self, session: Session, identifier: str) -> Resolution:
        if is_uuid(identifier):
            found = self.profile_repo.get_by_id(session, uuid.UUID(identifier))
        else:
            found = self.profile_repo.get_by_login_id(session, identifier)

        if found.is_error:
            logger.error("Error fetching profile %r: %s", identifier, found.detail)

        profile = found.value if found.is_found else None
        if profile is None:
            return Resolution(profile=None, role=DEFAULT_ROLE)

        role = DEFAULT_ROLE
        role_lookup = self.role_repo.get_role(session, profile.id)
        if role_lookup.is_error:
            logger.error("Error fetching role for %s: %s", profile.id, role_lookup.detail)
        elif role_lookup.is_found and role_lookup.value:
            role = role_lookup.value

        return Resolution(profile=profile, role=role)

    def _remember(self, identifier: str, resolution: Resolution) -> None:
        keys = {identifier}
        if resolution.profile is not None:
            keys.add(str(resolution.profile.id))
            if resolution.profile.user_id:
                keys.add(resolution.profile.user_id)

        for key in keys:
            self.cache.set(key, resolution)
