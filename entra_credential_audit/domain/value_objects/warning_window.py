"""Warning window value object."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WarningWindow:
    """Number of days before expiration during which a credential is expiring."""

    days: int = 30

    def __post_init__(self) -> None:
        """Validate the window is positive."""
        if self.days <= 0:
            msg = f"Warning window must be at least 1 day, got {self.days}"
            raise ValueError(msg)

    def contains(self, days_remaining: int) -> bool:
        """Check if a credential with this many days left is inside the window."""
        return 0 < days_remaining <= self.days
