"""
Result values returned across the hosted-database boundary.

Database calls never raise to their callers: they return ``Ok(value)`` on
success or ``Err(reason)`` on any connectivity, HTTP or decoding failure,
and the caller picks the recovery path with an ``isinstance`` check.

CHANGELOG:
- 2026-10-13: Initial creation (STORY-005)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the call's value."""

    value: T


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying a human-readable reason for the logs."""

    reason: str


Result = Union[Ok[T], Err]
