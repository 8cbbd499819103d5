"""Audit report aggregate root."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from ..value_objects import (
    CredentialType,
    ExpiringCredentialRecord,
    NotificationGroup,
    WarningWindow,
    group_by_recipient,
)


@dataclass(frozen=True, slots=True)
class AuditReport:
    """Aggregate root holding the expiring credentials found by one run."""

    records: tuple[ExpiringCredentialRecord, ...]
    warning_window: WarningWindow
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    applications_scanned: int = 0

    @property
    def total_count(self) -> int:
        """Total expiring credential count."""
        return len(self.records)

    @property
    def secret_count(self) -> int:
        """Count of expiring client secrets."""
        return sum(1 for r in self.records if r.kind == CredentialType.SECRET)

    @property
    def certificate_count(self) -> int:
        """Count of expiring certificates."""
        return sum(1 for r in self.records if r.kind == CredentialType.CERTIFICATE)

    @property
    def affected_applications_count(self) -> int:
        """Count of unique applications with expiring credentials."""
        return len({r.app_id for r in self.records})

    @property
    def unowned_count(self) -> int:
        """Count of records without a resolved owner recipient."""
        return sum(1 for r in self.records if not r.has_owner)

    @property
    def is_empty(self) -> bool:
        """Check if no credential is expiring."""
        return not self.records

    def notification_groups(self) -> tuple[NotificationGroup, ...]:
        """Group owned records by recipient, in scan order."""
        return group_by_recipient(self.records)

    def get_summary(self) -> str:
        """Generate a human-readable summary of the report."""
        if self.is_empty:
            return f"No credentials expiring within {self.warning_window.days} days"

        parts: list[str] = []
        if self.secret_count:
            parts.append(f"{self.secret_count} secret(s)")
        if self.certificate_count:
            parts.append(f"{self.certificate_count} certificate(s)")

        return (
            f"{self.total_count} credentials expiring within {self.warning_window.days} days "
            f"across {self.affected_applications_count} applications: {', '.join(parts)}"
        )
