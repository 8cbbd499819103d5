"""Explicit phase outcomes and failure policies for an audit run."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Generic, TypeVar

T = TypeVar("T")


class Phase(StrEnum):
    """Phases of one audit run that can fail."""

    AUTHENTICATE = auto()
    LIST = auto()
    SCAN = auto()
    WRITE = auto()
    DISPATCH = auto()

    def __str__(self) -> str:
        return self.value


class FailurePolicy(StrEnum):
    """What the orchestrator does when a per-item phase fails."""

    ABORT = auto()
    ISOLATE = auto()

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """A phase completed with a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failure:
    """A phase failed; ``subject`` names the application or recipient, if any."""

    phase: Phase
    error: Exception
    subject: str | None = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        """Error message for logs and summaries."""
        return str(self.error)


Outcome = Success[T] | Failure
