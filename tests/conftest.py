"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from entra_credential_audit.application.exceptions import (
    AuthenticationError,
    DirectoryQueryError,
    DispatchError,
    ReportWriteError,
)
from entra_credential_audit.domain.entities import Application, Credential
from entra_credential_audit.domain.value_objects import CredentialType, WarningWindow

NOW = datetime(2025, 1, 1, tzinfo=UTC)


def make_credential(
    days: float | None,
    *,
    name: str = "cred",
    credential_type: CredentialType = CredentialType.SECRET,
) -> Credential:
    """Credential expiring ``days`` after NOW (no expiry when None)."""
    return Credential(
        credential_type=credential_type,
        display_name=name,
        expires_at=None if days is None else NOW + timedelta(days=days),
        key_id=f"key-{name}",
    )


def make_application(
    app_id: str,
    *credentials: Credential,
    name: str | None = None,
    notes: str | None = None,
    info_notes: str | None = None,
) -> Application:
    """Application snapshot with the given credentials."""
    return Application(
        app_id=app_id,
        display_name=name or f"App {app_id}",
        object_id=f"obj-{app_id}",
        notes=notes,
        info_notes=info_notes,
        credentials=credentials,
    )


class FakeDirectory:
    """In-memory ApplicationDirectory."""

    def __init__(
        self,
        applications: list[Application] | None = None,
        *,
        auth_error: str | None = None,
        list_error: str | None = None,
    ) -> None:
        self.applications = applications or []
        self.auth_error = auth_error
        self.list_error = list_error
        self.list_calls = 0

    async def authenticate(self) -> None:
        if self.auth_error:
            raise AuthenticationError(self.auth_error)

    async def list_applications(self) -> list[Application]:
        self.list_calls += 1
        if self.list_error:
            raise DirectoryQueryError(self.list_error)
        return list(self.applications)


class FakeMailSender:
    """MailSender recording every send; recipients in ``failing`` raise."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self.attempts: list[str] = []
        self.failing = failing or set()

    async def send_mail(self, recipient: str, subject: str, html_body: str) -> None:
        self.attempts.append(recipient)
        if recipient in self.failing:
            raise DispatchError(recipient, "mailbox unavailable")
        self.sent.append((recipient, subject, html_body))


class FakeWriter:
    """ReportWriter keeping files in memory."""

    def __init__(self, *, fail: bool = False) -> None:
        self.files: dict[str, str] = {}
        self.fail = fail

    def write(self, path: str, content: str) -> None:
        if self.fail:
            msg = f"Cannot write report to {path}: disk full"
            raise ReportWriteError(msg)
        self.files[path] = content


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation instant."""
    return NOW


@pytest.fixture
def default_window() -> WarningWindow:
    """Default 30 day warning window."""
    return WarningWindow(days=30)


@pytest.fixture
def sample_applications() -> list[Application]:
    """Three applications, two sharing an owner and one without a tag."""
    return [
        make_application(
            "app-1",
            make_credential(10, name="api-secret"),
            make_credential(120, name="long-lived"),
            make_credential(5, name="signing-cert", credential_type=CredentialType.CERTIFICATE),
            name="Billing API",
            notes="NotifyEmail=team@contoso.com;cost-center=42",
        ),
        make_application(
            "app-2",
            make_credential(-1, name="old-cert", credential_type=CredentialType.CERTIFICATE),
            make_credential(20, name="worker-secret"),
            name="Billing Worker",
            notes="owner: billing. notifyemail = team@contoso.com",
        ),
        make_application(
            "app-3",
            make_credential(3, name="legacy-secret"),
            make_credential(None, name="no-expiry"),
            name="Legacy Portal",
        ),
    ]
