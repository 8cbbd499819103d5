"""Writes rendered reports to the local file system."""

from __future__ import annotations

from pathlib import Path

from ....application.exceptions import ReportWriteError


class FileReportWriter:
    """Write a report verbatim as UTF-8 text."""

    def write(self, path: str, content: str) -> None:
        """
        Write ``content`` to ``path``, replacing any existing file.

        Raises:
            ReportWriteError: If the file cannot be written.
        """
        try:
            Path(path).write_text(content, encoding="utf-8")
        except OSError as e:
            msg = f"Cannot write report to {path}: {e}"
            raise ReportWriteError(msg) from e
