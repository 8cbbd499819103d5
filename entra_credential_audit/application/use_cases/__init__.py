"""Application use cases."""

from .audit_credentials import AuditCredentials, AuditOptions, AuditResult, RunState

__all__ = [
    "AuditCredentials",
    "AuditOptions",
    "AuditResult",
    "RunState",
]
