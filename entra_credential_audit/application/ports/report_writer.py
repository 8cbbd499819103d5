"""Port for writing the report artifact."""

from typing import Protocol


class ReportWriter(Protocol):
    """Port for persisting a rendered report to local storage."""

    def write(self, path: str, content: str) -> None:
        """
        Write the report.

        Raises:
            ReportWriteError: If the file cannot be written.
        """
        ...
