"""Domain exceptions."""


class DomainError(Exception):
    """Base exception for domain errors."""


class ScanError(DomainError):
    """Raised when the credentials of one application cannot be scanned."""

    def __init__(self, app_id: str, app_name: str, reason: str) -> None:
        super().__init__(f"Failed to scan application {app_name} ({app_id}): {reason}")
        self.app_id = app_id
        self.app_name = app_name
        self.reason = reason
