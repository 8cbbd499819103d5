"""Application ports - Interfaces for external adapters."""

from .application_directory import ApplicationDirectory
from .mail_sender import MailSender
from .report_renderer import ReportRenderer
from .report_writer import ReportWriter

__all__ = [
    "ApplicationDirectory",
    "MailSender",
    "ReportRenderer",
    "ReportWriter",
]
