"""Expiring credential record value object."""

from dataclasses import dataclass
from datetime import datetime

from .credential_type import CredentialType

NOT_DEFINED = "(not defined)"


@dataclass(frozen=True, slots=True)
class ExpiringCredentialRecord:
    """A credential found inside the warning window at scan time."""

    app_name: str
    app_id: str
    credential_name: str
    kind: CredentialType
    expires_at: datetime
    days_remaining: int
    notify_email: str = NOT_DEFINED

    @property
    def has_owner(self) -> bool:
        """Check if an owner recipient was resolved for this record."""
        return self.notify_email != NOT_DEFINED

    @property
    def portal_url(self) -> str:
        """URL to manage this app's credentials in the Azure Portal."""
        return (
            f"https://portal.azure.com/#view/Microsoft_AAD_RegisteredApps"
            f"/ApplicationMenuBlade/~/Credentials/appId/{self.app_id}"
        )
