"""Domain entities - Objects with identity and lifecycle."""

from .application import Application
from .audit_report import AuditReport
from .credential import Credential

__all__ = [
    "Application",
    "AuditReport",
    "Credential",
]
