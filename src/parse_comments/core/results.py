"""Outcome of a fallible parse step.

Parsing stages never decide on their own whether a failure is fatal. They
return an ``Outcome`` and the ``strict`` policy is applied once, in
``settle``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

from loguru import logger

from .exceptions import ParseError

T = TypeVar("T")


class Rejection(StrEnum):
    """Reasons a syntactically valid tag is dropped without raising."""

    UNKNOWN_TITLE = "unknown_title"
    MISSING_TYPE = "missing_type"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a value, a classified parse error, or a silent rejection."""

    value: T | None = None
    error: ParseError | None = None
    rejection: Rejection | None = None

    @classmethod
    def ok(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, error: ParseError) -> Outcome[T]:
        return cls(error=error)

    @classmethod
    def reject(cls, reason: Rejection) -> Outcome[T]:
        return cls(rejection=reason)

    @property
    def is_ok(self) -> bool:
        return self.error is None and self.rejection is None


def settle(outcome: Outcome[T], strict: bool) -> T | None:
    """Turn an outcome into a value, ``None`` or a raised error.

    Args:
        outcome: Result of a parse step
        strict: Whether parse errors propagate to the caller

    Returns:
        The value, or None when the step failed or was rejected

    Raises:
        ParseError: If the step failed and ``strict`` is set
    """
    if outcome.error is not None:
        if strict:
            raise outcome.error
        logger.debug(f"Dropping malformed input: {outcome.error}")
        return None
    if outcome.rejection is not None:
        logger.debug(f"Dropping rejected tag ({outcome.rejection.value})")
        return None
    return outcome.value
