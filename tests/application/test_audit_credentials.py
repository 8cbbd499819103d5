"""Tests for the AuditCredentials use case."""

from __future__ import annotations

import asyncio

import pytest
from conftest import (
    NOW,
    FakeDirectory,
    FakeMailSender,
    FakeWriter,
    make_application,
    make_credential,
)

from entra_credential_audit.application.outcome import FailurePolicy, Phase
from entra_credential_audit.application.use_cases import (
    AuditCredentials,
    AuditOptions,
    AuditResult,
    RunState,
)
from entra_credential_audit.domain.entities import Application, Credential
from entra_credential_audit.domain.value_objects import CredentialType, WarningWindow
from entra_credential_audit.infrastructure.adapters import HtmlReportRenderer

ADMIN = "admin@contoso.com"


def _run(
    applications: list[Application],
    *,
    directory: FakeDirectory | None = None,
    mail: FakeMailSender | None = None,
    writer: FakeWriter | None = None,
    **options: object,
) -> AuditResult:
    use_case = AuditCredentials(
        directory=directory or FakeDirectory(applications),
        mail_sender=mail or FakeMailSender(),
        renderer=HtmlReportRenderer(),
        writer=writer or FakeWriter(),
        options=AuditOptions(warning_window=WarningWindow(days=30), admin_email=ADMIN, **options),  # type: ignore[arg-type]
    )
    return asyncio.run(use_case.execute(now=NOW))


def _broken_application() -> Application:
    broken = Credential(
        credential_type=CredentialType.SECRET,
        display_name="broken",
        expires_at="soon",  # type: ignore[arg-type]
    )
    return make_application("bad-app", broken, name="Broken App", notes="NotifyEmail=bad@x.com")


class TestLocalExecution:
    """Local mode writes the report and never sends mail."""

    def test_writes_one_file_and_sends_nothing(self, sample_applications: list[Application]) -> None:
        mail = FakeMailSender()
        writer = FakeWriter()

        result = _run(
            sample_applications,
            mail=mail,
            writer=writer,
            local_execution=True,
            output_path="report.html",
        )

        assert result.success is True
        assert mail.attempts == []
        assert list(writer.files) == ["report.html"]
        assert writer.files["report.html"] == result.admin_html
        assert result.report_written is True
        assert result.history == (
            RunState.INIT,
            RunState.AUTHENTICATED,
            RunState.SCANNED,
            RunState.RENDERED,
            RunState.LOCAL_WRITE,
            RunState.DONE,
        )

    def test_write_failure_is_not_fatal(self, sample_applications: list[Application]) -> None:
        result = _run(
            sample_applications,
            writer=FakeWriter(fail=True),
            local_execution=True,
            output_path="report.html",
        )

        assert result.state == RunState.DONE
        assert result.report_written is False
        assert result.report is not None
        assert result.report.total_count == 4


class TestRemoteDispatch:
    """Remote mode sends the admin report and one report per owner."""

    def test_sends_admin_plus_one_per_recipient(self, sample_applications: list[Application]) -> None:
        mail = FakeMailSender()

        result = _run(sample_applications, mail=mail)

        assert result.success is True
        assert [recipient for recipient, _, _ in mail.sent] == [ADMIN, "team@contoso.com"]
        assert result.notifications_sent == 2
        assert result.history[-2:] == (RunState.REMOTE_DISPATCH, RunState.DONE)

    def test_admin_report_contains_every_record(self, sample_applications: list[Application]) -> None:
        mail = FakeMailSender()

        _run(sample_applications, mail=mail)

        _, subject, body = mail.sent[0]
        assert subject == "Entra ID App Credentials Report - 4 expiring within 30 days"
        for name in ("api-secret", "signing-cert", "worker-secret", "legacy-secret"):
            assert name in body

    def test_owner_report_contains_only_owned_records(
        self, sample_applications: list[Application]
    ) -> None:
        mail = FakeMailSender()

        _run(sample_applications, mail=mail)

        _, subject, body = mail.sent[1]
        assert subject == "Action required: 3 app credential(s) expiring within 30 days"
        assert "worker-secret" in body
        assert "legacy-secret" not in body

    def test_distinct_recipients(self) -> None:
        apps = [
            make_application("a", make_credential(5), notes="NotifyEmail=one@x.com"),
            make_application("b", make_credential(6), notes="NotifyEmail=two@x.com"),
            make_application("c", make_credential(7), notes="NotifyEmail=one@x.com"),
            make_application("d", make_credential(8)),
        ]
        mail = FakeMailSender()

        result = _run(apps, mail=mail)

        assert mail.attempts == [ADMIN, "one@x.com", "two@x.com"]
        assert result.notifications_sent == 3

    def test_admin_report_sent_when_nothing_expires(self) -> None:
        mail = FakeMailSender()

        result = _run([make_application("a", make_credential(200))], mail=mail)

        assert mail.attempts == [ADMIN]
        assert result.success is True

    def test_output_path_is_also_written(self, sample_applications: list[Application]) -> None:
        writer = FakeWriter()

        result = _run(sample_applications, writer=writer, output_path="out.html")

        assert result.report_written is True
        assert "out.html" in writer.files
        assert result.notifications_sent == 2


class TestPhaseFailures:
    """Authentication and listing failures always abort."""

    def test_authentication_failure(self, sample_applications: list[Application]) -> None:
        directory = FakeDirectory(sample_applications, auth_error="invalid_client")
        mail = FakeMailSender()
        writer = FakeWriter()

        result = _run(
            sample_applications, directory=directory, mail=mail, writer=writer, output_path="r.html"
        )

        assert result.state == RunState.FAILED
        assert result.history == (RunState.INIT, RunState.FAILED)
        assert result.failures[0].phase == Phase.AUTHENTICATE
        assert directory.list_calls == 0
        assert mail.attempts == []
        assert writer.files == {}
        assert result.report is None

    def test_listing_failure(self, sample_applications: list[Application]) -> None:
        directory = FakeDirectory(sample_applications, list_error="503 Service Unavailable")
        mail = FakeMailSender()

        result = _run(sample_applications, directory=directory, mail=mail)

        assert result.state == RunState.FAILED
        assert result.history == (RunState.INIT, RunState.AUTHENTICATED, RunState.FAILED)
        assert result.failures[0].phase == Phase.LIST
        assert mail.attempts == []


class TestScanFailurePolicy:
    """A malformed application aborts or is isolated, per policy."""

    def test_abort_fails_run_without_output(self, sample_applications: list[Application]) -> None:
        mail = FakeMailSender()
        writer = FakeWriter()
        apps = [sample_applications[0], _broken_application(), sample_applications[1]]

        result = _run(apps, mail=mail, writer=writer, output_path="r.html")

        assert result.state == RunState.FAILED
        assert result.failures[0].phase == Phase.SCAN
        assert result.failures[0].subject == "bad-app"
        assert result.report is None
        assert mail.attempts == []
        assert writer.files == {}

    def test_isolate_skips_application(self, sample_applications: list[Application]) -> None:
        mail = FakeMailSender()
        apps = [sample_applications[0], _broken_application(), sample_applications[1]]

        result = _run(apps, mail=mail, scan_failure_policy=FailurePolicy.ISOLATE)

        assert result.state == RunState.DONE
        assert result.partial is True
        assert result.success is False
        assert result.report is not None
        assert result.report.total_count == 3
        assert mail.attempts == [ADMIN, "team@contoso.com"]


class TestDispatchFailurePolicy:
    """A failed send aborts the remaining sends or is isolated, per policy."""

    @pytest.fixture
    def owned_apps(self) -> list[Application]:
        return [
            make_application("a", make_credential(5), notes="NotifyEmail=one@x.com"),
            make_application("b", make_credential(6), notes="NotifyEmail=two@x.com"),
            make_application("c", make_credential(7), notes="NotifyEmail=three@x.com"),
        ]

    def test_abort_stops_remaining_sends(self, owned_apps: list[Application]) -> None:
        mail = FakeMailSender(failing={"two@x.com"})

        result = _run(owned_apps, mail=mail)

        assert mail.attempts == [ADMIN, "one@x.com", "two@x.com"]
        assert [r for r, _, _ in mail.sent] == [ADMIN, "one@x.com"]
        assert result.state == RunState.FAILED
        assert result.notifications_sent == 2
        assert result.notifications_failed == 1
        assert result.failures[0].phase == Phase.DISPATCH
        assert result.failures[0].subject == "two@x.com"
        assert result.report is not None

    def test_admin_failure_aborts_owner_sends(self, owned_apps: list[Application]) -> None:
        mail = FakeMailSender(failing={ADMIN})

        result = _run(owned_apps, mail=mail)

        assert mail.attempts == [ADMIN]
        assert result.state == RunState.FAILED

    def test_isolate_continues(self, owned_apps: list[Application]) -> None:
        mail = FakeMailSender(failing={"two@x.com"})

        result = _run(owned_apps, mail=mail, dispatch_failure_policy=FailurePolicy.ISOLATE)

        assert mail.attempts == [ADMIN, "one@x.com", "two@x.com", "three@x.com"]
        assert result.state == RunState.DONE
        assert result.partial is True
        assert result.notifications_sent == 3
        assert result.notifications_failed == 1
