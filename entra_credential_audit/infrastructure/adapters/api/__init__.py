"""API adapter for HTTP endpoints."""

from .app import create_app
from .models import AuditResponse, HealthResponse, ReportResponse

__all__ = [
    "AuditResponse",
    "HealthResponse",
    "ReportResponse",
    "create_app",
]
