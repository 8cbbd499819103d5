"""Application layer exceptions."""


class ApplicationError(Exception):
    """Base exception for application errors."""


class AuthenticationError(ApplicationError):
    """Raised when a token cannot be acquired from the identity provider."""


class DirectoryQueryError(ApplicationError):
    """Raised when application registrations cannot be listed."""


class DispatchError(ApplicationError):
    """Raised when a report cannot be mailed to a recipient."""

    def __init__(self, recipient: str, message: str) -> None:
        super().__init__(f"Failed to send report to {recipient}: {message}")
        self.recipient = recipient


class ReportWriteError(ApplicationError):
    """Raised when the report file cannot be written."""
