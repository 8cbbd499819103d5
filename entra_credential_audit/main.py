#!/usr/bin/env python3
"""
Entra ID App Credential Audit

Composition root and application entry point.
Wires together all layers following hexagonal architecture principles.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from croniter import croniter

from . import __version__
from .application.use_cases import AuditCredentials
from .infrastructure.adapters import (
    EntraIdApplicationDirectory,
    FileReportWriter,
    GraphClient,
    GraphMailSender,
    HtmlReportRenderer,
)
from .infrastructure.config import Settings, load_settings

if TYPE_CHECKING:
    from .application.use_cases import AuditResult

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


class ApplicationContainer:
    """
    Dependency injection container.

    Responsible for creating and wiring all application components.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize container with settings."""
        self._settings = settings

    def create_graph_client(self) -> GraphClient:
        """Create the Graph API client shared by directory and mail adapters."""
        return GraphClient(self._settings.graph_config)

    def create_audit_use_case(self) -> AuditCredentials:
        """Create the main use case with all dependencies."""
        client = self.create_graph_client()
        return AuditCredentials(
            directory=EntraIdApplicationDirectory(client),
            mail_sender=GraphMailSender(client, self._settings.mail_config),
            renderer=HtmlReportRenderer(),
            writer=FileReportWriter(),
            options=self._settings.audit_options,
        )


class Application:
    """
    Main application orchestrator.

    Handles run modes (single execution, scheduled, or API) and lifecycle.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize application with settings."""
        self._settings = settings
        self._container = ApplicationContainer(settings)

    async def run_once(self) -> AuditResult:
        """Execute a single audit."""
        use_case = self._container.create_audit_use_case()
        result = await use_case.execute()
        self._log_result(result)
        return result

    async def run_scheduled(self) -> None:
        """Run in scheduled mode with cron expression."""
        logger.info("Starting scheduled mode with cron: %s", self._settings.cron_schedule)

        # Run immediately on startup
        logger.info("Running initial audit on startup...")
        await self.run_once()

        cron = croniter(self._settings.cron_schedule, datetime.now(UTC))

        while True:
            next_run = cron.get_next(datetime)
            now = datetime.now(UTC)

            # Handle timezone-naive datetime from croniter
            if next_run.tzinfo is None:
                next_run = next_run.replace(tzinfo=UTC)

            sleep_seconds = (next_run - now).total_seconds()

            if sleep_seconds > 0:
                logger.info("Next audit scheduled for %s", next_run.isoformat())
                await asyncio.sleep(sleep_seconds)

            logger.info("Running scheduled audit...")
            await self.run_once()

    async def run_api(self) -> None:
        """Run in API server mode on the already running event loop."""
        import uvicorn

        from .infrastructure.adapters.api import create_app

        logger.info(
            "Starting API server on %s:%d",
            self._settings.api_host,
            self._settings.api_port,
        )

        app = create_app(
            audit_func=self.run_once,
            version=__version__,
        )

        config = uvicorn.Config(
            app,
            host=self._settings.api_host,
            port=self._settings.api_port,
            log_level=self._settings.log_level.lower(),
        )
        await uvicorn.Server(config).serve()

    async def run(self) -> int:
        """
        Run the application based on configured mode.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        # API mode takes precedence if enabled
        if self._settings.api_enabled:
            await self.run_api()
            return 0

        match self._settings.run_mode.lower():
            case "once":
                logger.info("Running in single-execution mode")
                result = await self.run_once()
                return 0 if result.success else 1

            case "scheduled":
                await self.run_scheduled()
                return 0  # Never reached in scheduled mode

            case _:
                logger.error(
                    "Invalid RUN_MODE: %s (use 'once', 'scheduled', or set API_ENABLED=true)",
                    self._settings.run_mode,
                )
                return 1

    @staticmethod
    def _log_result(result: AuditResult) -> None:
        if result.success:
            logger.info(
                "Audit finished: %d report(s) sent, report written: %s",
                result.notifications_sent,
                result.report_written,
            )
            return
        for failure in result.failures:
            logger.error("  %s failure (%s): %s", failure.phase, failure.subject or "-", failure.message)
        if result.partial:
            logger.warning("Audit finished with %d isolated failure(s)", len(result.failures))
        else:
            logger.error("Audit failed in state %s", result.history[-2])


async def async_main() -> int:
    """Async entry point."""
    try:
        logger.info("Entra ID App Credential Audit starting...")

        settings = load_settings()
        logging.getLogger().setLevel(settings.log_level.upper())

        app = Application(settings)
        return await app.run()

    except ValueError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        return 0
    except Exception:
        logger.exception("Unexpected error")
        return 1


def main() -> None:
    """Main entry point."""
    exit_code = asyncio.run(async_main())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
