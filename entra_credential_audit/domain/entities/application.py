"""Application entity representing an Entra ID app registration."""

from dataclasses import dataclass, field

from .credential import Credential


@dataclass(frozen=True, slots=True)
class Application:
    """An Entra ID application registration snapshot."""

    app_id: str
    display_name: str
    object_id: str = ""
    notes: str | None = None
    info_notes: str | None = None
    credentials: tuple[Credential, ...] = field(default_factory=tuple)
