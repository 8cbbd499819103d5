"""Report rendering and output adapters."""

from .file_writer import FileReportWriter
from .html_renderer import HtmlReportRenderer

__all__ = [
    "FileReportWriter",
    "HtmlReportRenderer",
]
