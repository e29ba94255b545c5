# app/core/profile_cache.py
from dataclasses import dataclass

from app.models.profile import Profile


@dataclass(frozen=True)
class Resolution:
    """Resolved identity: profile (or None) plus role label."""

    profile: Profile | None
    role: str


class ProfileCache:
    """
    In-process memo table: identifier alias -> Resolution.

    No TTL and no invalidation: entries live until `clear()` is called.
    Shared by every resolver call in the process without locking; writers
    for the same alias converge on the same value, so last writer wins.
    """

    def __init__(self):
        self._entries: dict[str, Resolution] = {}

    def get(self, key: str) -> Resolution | None:
        return self._entries.get(key)

    def set(self, key: str, value: Resolution) -> None:
        self._entries[key] = value

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
