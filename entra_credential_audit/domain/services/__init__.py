"""Domain services - Stateless operations on domain objects."""

from .expiration_scanner import ExpirationScanner
from .owner_resolver import (
    DEFAULT_NOTE_SOURCES,
    NoteSource,
    OwnerResolver,
    parse_notify_email,
)

__all__ = [
    "DEFAULT_NOTE_SOURCES",
    "ExpirationScanner",
    "NoteSource",
    "OwnerResolver",
    "parse_notify_email",
]
