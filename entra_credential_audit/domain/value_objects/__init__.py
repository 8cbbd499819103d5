"""Domain value objects - Immutable objects defined by their attributes."""

from .credential_type import CredentialType
from .expiring_credential_record import NOT_DEFINED, ExpiringCredentialRecord
from .notification_group import NotificationGroup, group_by_recipient
from .warning_window import WarningWindow

__all__ = [
    "NOT_DEFINED",
    "CredentialType",
    "ExpiringCredentialRecord",
    "NotificationGroup",
    "WarningWindow",
    "group_by_recipient",
]
