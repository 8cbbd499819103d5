"""Credential entity representing a secret or certificate."""

from dataclasses import dataclass
from datetime import UTC, datetime

from ..value_objects import CredentialType


@dataclass(frozen=True, slots=True)
class Credential:
    """A credential (secret or certificate) belonging to an application."""

    credential_type: CredentialType
    display_name: str | None
    expires_at: datetime | None
    key_id: str = ""

    @property
    def has_expiration(self) -> bool:
        """Check if the credential carries an expiration timestamp."""
        return self.expires_at is not None

    @property
    def label(self) -> str:
        """Name to show for this credential."""
        return self.display_name or self.key_id[:8] or "(unnamed)"

    def days_until_expiry(self, now: datetime) -> int:
        """
        Whole days from ``now`` until expiration, rounded down.

        Negative once the credential has expired. Naive datetimes are
        assumed to be UTC.
        """
        if self.expires_at is None:
            msg = "Credential has no expiration date"
            raise ValueError(msg)
        expiry = self.expires_at if self.expires_at.tzinfo else self.expires_at.replace(tzinfo=UTC)
        reference = now if now.tzinfo else now.replace(tzinfo=UTC)
        return (expiry - reference).days
