"""Infrastructure adapters - Implementations of application ports."""

from .entra_id import EntraIdApplicationDirectory, GraphClient, GraphClientConfig
from .notifications import GraphMailSender
from .reporting import FileReportWriter, HtmlReportRenderer

__all__ = [
    "EntraIdApplicationDirectory",
    "FileReportWriter",
    "GraphClient",
    "GraphClientConfig",
    "GraphMailSender",
    "HtmlReportRenderer",
]
