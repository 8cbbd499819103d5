"""API response models (no credential details exposed)."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy"]
    version: str
    timestamp: datetime


class StatisticsResponse(BaseModel):
    """Credential statistics (no details)."""

    applications_scanned: int = Field(description="Application registrations scanned")
    affected_applications: int = Field(description="Applications with expiring credentials")
    expiring_credentials: int = Field(description="Credentials inside the warning window")
    expiring_secrets: int = Field(description="Expiring client secrets")
    expiring_certificates: int = Field(description="Expiring certificates")
    owner_groups: int = Field(description="Distinct owner recipients")
    unowned_credentials: int = Field(description="Expiring credentials without an owner tag")


class ReportResponse(BaseModel):
    """Audit report summary (no credential details)."""

    generated_at: datetime
    warning_days: int
    summary: str = Field(description="Human-readable summary")
    statistics: StatisticsResponse


class AuditResponse(BaseModel):
    """Response from triggering an audit."""

    success: bool
    state: str = Field(description="Final state of the run")
    message: str
    report: ReportResponse | None = None
    notifications_sent: int = 0
    notifications_failed: int = 0
    report_written: bool = False
    failures: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error response."""

    error: str
    detail: str | None = None
