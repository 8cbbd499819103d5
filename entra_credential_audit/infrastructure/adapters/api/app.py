"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import FastAPI, HTTPException, status
from fastapi.responses import JSONResponse

from .models import (
    AuditResponse,
    ErrorResponse,
    HealthResponse,
    ReportResponse,
    StatisticsResponse,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable, Coroutine

    from ....application.use_cases import AuditResult
    from ....domain.entities import AuditReport

logger = logging.getLogger(__name__)


def _report_to_response(report: AuditReport) -> ReportResponse:
    """Convert domain report to API response (no credential details)."""
    return ReportResponse(
        generated_at=report.generated_at,
        warning_days=report.warning_window.days,
        summary=report.get_summary(),
        statistics=StatisticsResponse(
            applications_scanned=report.applications_scanned,
            affected_applications=report.affected_applications_count,
            expiring_credentials=report.total_count,
            expiring_secrets=report.secret_count,
            expiring_certificates=report.certificate_count,
            owner_groups=len(report.notification_groups()),
            unowned_credentials=report.unowned_count,
        ),
    )


def _result_message(result: AuditResult) -> str:
    if result.success:
        return "Audit completed successfully"
    if result.partial:
        return "Audit completed with isolated failures"
    return "Audit failed"


class ApiState:
    """Shared state for API endpoints."""

    def __init__(
        self,
        audit_func: Callable[[], Coroutine[None, None, AuditResult]],
        version: str = "1.0.0",
    ) -> None:
        """Initialize API state."""
        self.audit_func = audit_func
        self.version = version
        self.last_report: AuditReport | None = None


def create_app(
    audit_func: Callable[[], Coroutine[None, None, AuditResult]],
    version: str = "1.0.0",
) -> FastAPI:
    """
    Create FastAPI application.

    Args:
        audit_func: Async function executing one audit run.
        version: Application version string.

    Returns:
        Configured FastAPI application.
    """
    state = ApiState(audit_func=audit_func, version=version)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler."""
        logger.info("API server starting...")
        yield
        logger.info("API server shutting down...")

    app = FastAPI(
        title="Entra ID App Credential Audit API",
        description="Audit Entra ID application secrets and certificates for expiration. "
        "This API provides health checks, summary reports, and on-demand audits. "
        "**No credential details are exposed through this API.**",
        version=version,
        lifespan=lifespan,
        responses={
            500: {"model": ErrorResponse, "description": "Internal server error"},
        },
    )

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            version=state.version,
            timestamp=datetime.now(UTC),
        )

    @app.get(
        "/api/v1/report",
        response_model=ReportResponse,
        tags=["Reports"],
        summary="Get latest report",
        responses={
            404: {"model": ErrorResponse, "description": "No report available"},
        },
    )
    async def get_report() -> ReportResponse:
        if state.last_report is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No report available. Trigger an audit first using POST /api/v1/audit",
            )
        return _report_to_response(state.last_report)

    @app.post(
        "/api/v1/audit",
        response_model=AuditResponse,
        tags=["Operations"],
        summary="Trigger credential audit",
        description="Run one audit: scan all application registrations and, "
        "depending on the configured mode, write the report or send notifications.",
    )
    async def trigger_audit() -> AuditResponse:
        logger.info("API: Triggering credential audit...")
        result = await state.audit_func()

        if result.report is not None:
            state.last_report = result.report

        return AuditResponse(
            success=result.success,
            state=str(result.state),
            message=_result_message(result),
            report=_report_to_response(result.report) if result.report else None,
            notifications_sent=result.notifications_sent,
            notifications_failed=result.notifications_failed,
            report_written=result.report_written,
            failures=[f"{f.phase}: {f.message}" for f in result.failures],
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc: Exception) -> JSONResponse:  # noqa: ARG001
        """Handle uncaught exceptions."""
        logger.exception("Unhandled exception in API")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "detail": str(exc)},
        )

    return app
