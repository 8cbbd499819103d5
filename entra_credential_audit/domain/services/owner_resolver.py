"""Domain service for resolving owner notification recipients."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..value_objects import NOT_DEFINED

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..entities import Application

NOTIFY_EMAIL_PATTERN = re.compile(r"NotifyEmail\s*=\s*([^\s;]+)", re.IGNORECASE)


def parse_notify_email(text: str | None) -> str | None:
    """
    Extract the ``NotifyEmail=<token>`` value from free text.

    The token runs until the first whitespace or ``;``. Matching is
    case-insensitive and the first occurrence wins. The token is not
    validated as an email address.

    Args:
        text: Free-text notes, possibly empty.

    Returns:
        The captured token, or None when the tag is absent.
    """
    if not text:
        return None
    match = NOTIFY_EMAIL_PATTERN.search(text)
    return match.group(1) if match else None


@dataclass(frozen=True, slots=True)
class NoteSource:
    """A named metadata field of an application that may carry the owner tag."""

    name: str
    read: Callable[[Application], str | None]


DEFAULT_NOTE_SOURCES: tuple[NoteSource, ...] = (
    NoteSource("info.notes", lambda app: app.info_notes),
    NoteSource("notes", lambda app: app.notes),
)


class OwnerResolver:
    """Resolve the owner recipient of an application from its metadata."""

    def __init__(self, sources: Sequence[NoteSource] = DEFAULT_NOTE_SOURCES) -> None:
        """Initialize resolver with note sources, queried in order."""
        self._sources = tuple(sources)

    def resolve(self, application: Application) -> str:
        """Return the first tag found across sources, or the sentinel."""
        for source in self._sources:
            recipient = parse_notify_email(source.read(application))
            if recipient:
                return recipient
        return NOT_DEFINED
