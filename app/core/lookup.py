# app/core/lookup.py
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """
    Tagged result returned by data/auth adapters.

    "No rows" is a normal outcome (NOT_FOUND), distinct from a real
    failure (ERROR). Only the adapters look at driver exceptions or error
    codes; services branch on `status`.
    """

    status: LookupStatus
    value: T | None = None
    detail: str | None = None

    @classmethod
    def found(cls, value: T) -> "Lookup[T]":
        return cls(LookupStatus.FOUND, value=value)

    @classmethod
    def not_found(cls) -> "Lookup[T]":
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def error(cls, detail: str) -> "Lookup[T]":
        return cls(LookupStatus.ERROR, detail=detail)

    @property
    def is_found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @property
    def is_error(self) -> bool:
        return self.status is LookupStatus.ERROR
