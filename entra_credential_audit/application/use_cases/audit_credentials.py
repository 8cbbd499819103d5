"""Use case for auditing expiring credentials and notifying recipients."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum, auto
from typing import TYPE_CHECKING

from ...domain.entities import AuditReport
from ...domain.exceptions import ScanError
from ...domain.services import ExpirationScanner, OwnerResolver
from ...domain.value_objects import WarningWindow
from ..exceptions import AuthenticationError, DirectoryQueryError, ReportWriteError
from ..outcome import Failure, FailurePolicy, Outcome, Phase, Success
from ..services import NotificationDispatcher, admin_subject, owner_subject

if TYPE_CHECKING:
    from ...domain.entities import Application
    from ...domain.value_objects import ExpiringCredentialRecord, NotificationGroup
    from ..ports import ApplicationDirectory, MailSender, ReportRenderer, ReportWriter

logger = logging.getLogger(__name__)


class RunState(StrEnum):
    """States of one audit run."""

    INIT = auto()
    AUTHENTICATED = auto()
    SCANNED = auto()
    RENDERED = auto()
    LOCAL_WRITE = auto()
    REMOTE_DISPATCH = auto()
    DONE = auto()
    FAILED = auto()

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class AuditOptions:
    """Plain values the use case needs from configuration."""

    warning_window: WarningWindow = field(default_factory=WarningWindow)
    admin_email: str = ""
    output_path: str | None = None
    local_execution: bool = False
    scan_failure_policy: FailurePolicy = FailurePolicy.ABORT
    dispatch_failure_policy: FailurePolicy = FailurePolicy.ABORT


@dataclass(frozen=True, slots=True)
class AuditResult:
    """Result of one audit run."""

    state: RunState
    history: tuple[RunState, ...]
    report: AuditReport | None = None
    admin_html: str | None = None
    failures: tuple[Failure, ...] = ()
    notifications_sent: int = 0
    notifications_failed: int = 0
    report_written: bool = False

    @property
    def success(self) -> bool:
        """Check if the run finished without any failure."""
        return self.state == RunState.DONE and not self.failures

    @property
    def partial(self) -> bool:
        """Check if the run finished but isolated some failures."""
        return self.state == RunState.DONE and bool(self.failures)


class _RunTracker:
    """Tracks state transitions and failures of a single run."""

    def __init__(self) -> None:
        self.state = RunState.INIT
        self.history: list[RunState] = [RunState.INIT]
        self.failures: list[Failure] = []

    def advance(self, state: RunState) -> None:
        logger.debug("Audit state: %s -> %s", self.state, state)
        self.state = state
        self.history.append(state)

    def record(self, failure: Failure) -> None:
        self.failures.append(failure)

    def finish(self, state: RunState, **kwargs: object) -> AuditResult:
        self.advance(state)
        return AuditResult(
            state=self.state,
            history=tuple(self.history),
            failures=tuple(self.failures),
            **kwargs,  # type: ignore[arg-type]
        )


class AuditCredentials:
    """
    Use case for auditing application credentials and sending reports.

    This is the main application service that sequences authentication,
    listing, scanning, rendering and either local write or remote dispatch.
    Authentication and listing failures always fail the run; scan and
    dispatch failures follow the configured failure policies.
    """

    def __init__(
        self,
        directory: ApplicationDirectory,
        mail_sender: MailSender,
        renderer: ReportRenderer,
        writer: ReportWriter,
        options: AuditOptions,
        *,
        owner_resolver: OwnerResolver | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Initialize the use case.

        Args:
            directory: Adapter for reading application registrations.
            mail_sender: Adapter for sending mail.
            renderer: Adapter rendering records to HTML.
            writer: Adapter writing the report file.
            options: Run options taken from configuration.
            owner_resolver: Resolver for owner recipients.
            clock: Source of the evaluation instant.
        """
        self._directory = directory
        self._dispatcher = NotificationDispatcher(mail_sender)
        self._renderer = renderer
        self._writer = writer
        self._options = options
        self._scanner = ExpirationScanner(options.warning_window, owner_resolver)
        self._clock = clock or (lambda: datetime.now(UTC))

    async def execute(self, now: datetime | None = None) -> AuditResult:
        """
        Execute one audit run.

        Args:
            now: Evaluation instant; defaults to the clock.

        Returns:
            AuditResult with the final state and what was produced.
        """
        now = now or self._clock()
        run = _RunTracker()
        mode = "local" if self._options.local_execution else "remote"
        logger.info(
            "Starting credential audit (%s mode, warning window %d days)...",
            mode,
            self._options.warning_window.days,
        )

        authenticated = await self._authenticate()
        if isinstance(authenticated, Failure):
            return self._fail(run, authenticated)
        run.advance(RunState.AUTHENTICATED)

        listed = await self._list_applications()
        if isinstance(listed, Failure):
            return self._fail(run, listed)
        applications = listed.value

        scanned = self._scan(run, applications, now)
        if isinstance(scanned, Failure):
            return self._fail(run, scanned)
        report = AuditReport(
            records=scanned.value,
            warning_window=self._options.warning_window,
            generated_at=now,
            applications_scanned=len(applications),
        )
        run.advance(RunState.SCANNED)
        logger.info("Scan complete: %s", report.get_summary())

        admin_html = self._renderer.render_admin_report(report.records, report.generated_at)
        owner_reports = [
            (group, self._renderer.render_owner_report(group, report.generated_at))
            for group in report.notification_groups()
        ]
        run.advance(RunState.RENDERED)
        logger.info("Rendered admin report and %d owner reports", len(owner_reports))

        if self._options.local_execution:
            run.advance(RunState.LOCAL_WRITE)
            written = self._write_report(admin_html)
            return run.finish(
                RunState.DONE,
                report=report,
                admin_html=admin_html,
                report_written=written,
            )

        run.advance(RunState.REMOTE_DISPATCH)
        written = self._write_report(admin_html) if self._options.output_path else False
        sent, failed, aborted = await self._dispatch(run, report, admin_html, owner_reports)
        if aborted:
            logger.error("Dispatch aborted after %d sent report(s); remaining sends skipped", sent)
        return run.finish(
            RunState.FAILED if aborted else RunState.DONE,
            report=report,
            admin_html=admin_html,
            notifications_sent=sent,
            notifications_failed=failed,
            report_written=written,
        )

    async def _authenticate(self) -> Outcome[None]:
        try:
            await self._directory.authenticate()
        except AuthenticationError as e:
            return Failure(phase=Phase.AUTHENTICATE, error=e)
        return Success(None)

    async def _list_applications(self) -> Outcome[list[Application]]:
        try:
            applications = await self._directory.list_applications()
        except AuthenticationError as e:
            return Failure(phase=Phase.AUTHENTICATE, error=e)
        except DirectoryQueryError as e:
            return Failure(phase=Phase.LIST, error=e)
        logger.info("Retrieved %d application registrations", len(applications))
        return Success(applications)

    def _scan_application(
        self, application: Application, now: datetime
    ) -> Outcome[tuple[ExpiringCredentialRecord, ...]]:
        try:
            return Success(self._scanner.scan_application(application, now))
        except ScanError as e:
            return Failure(phase=Phase.SCAN, error=e, subject=application.app_id)

    def _scan(
        self, run: _RunTracker, applications: list[Application], now: datetime
    ) -> Outcome[tuple[ExpiringCredentialRecord, ...]]:
        """Scan every application, applying the scan failure policy."""
        records: list[ExpiringCredentialRecord] = []
        for application in applications:
            outcome = self._scan_application(application, now)
            if isinstance(outcome, Failure):
                if self._options.scan_failure_policy == FailurePolicy.ABORT:
                    return outcome
                logger.warning("Skipping application: %s", outcome.message)
                run.record(outcome)
                continue
            records.extend(outcome.value)
        return Success(tuple(records))

    def _write_report(self, html: str) -> bool:
        """Write the admin report; failures are logged and never abort the run."""
        path = self._options.output_path
        if not path:
            logger.warning("No output path configured; report not written")
            return False
        try:
            self._writer.write(path, html)
        except ReportWriteError as e:
            logger.warning("Could not write report to %s: %s", path, e)
            return False
        logger.info("Report written to %s", path)
        return True

    async def _dispatch(
        self,
        run: _RunTracker,
        report: AuditReport,
        admin_html: str,
        owner_reports: list[tuple[NotificationGroup, str]],
    ) -> tuple[int, int, bool]:
        """Send the admin report, then each owner report, in order."""
        deliveries = [(self._options.admin_email, admin_html, admin_subject(report))]
        deliveries.extend(
            (group.recipient, html, owner_subject(group, report.warning_window))
            for group, html in owner_reports
        )

        sent = 0
        failed = 0
        for recipient, html, subject in deliveries:
            outcome = await self._dispatcher.deliver(recipient, html, subject)
            if isinstance(outcome, Failure):
                failed += 1
                run.record(outcome)
                if self._options.dispatch_failure_policy == FailurePolicy.ABORT:
                    return sent, failed, True
                continue
            sent += 1

        logger.info("Dispatch complete: %d sent, %d failed", sent, failed)
        return sent, failed, False

    def _fail(self, run: _RunTracker, failure: Failure) -> AuditResult:
        logger.error("Audit failed during %s: %s", failure.phase, failure.message)
        run.record(failure)
        return run.finish(RunState.FAILED)
