"""Domain service for scanning application credentials for expiration."""

from __future__ import annotations

import logging
from itertools import chain
from typing import TYPE_CHECKING

from ..exceptions import ScanError
from ..value_objects import ExpiringCredentialRecord, WarningWindow
from .owner_resolver import OwnerResolver

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from ..entities import Application

logger = logging.getLogger(__name__)


class ExpirationScanner:
    """Domain service turning application snapshots into expiring records."""

    def __init__(
        self,
        warning_window: WarningWindow,
        owner_resolver: OwnerResolver | None = None,
    ) -> None:
        """Initialize scanner with the warning window and owner resolver."""
        self._window = warning_window
        self._resolver = owner_resolver or OwnerResolver()

    @property
    def warning_window(self) -> WarningWindow:
        """Configured warning window."""
        return self._window

    def scan(
        self, applications: Iterable[Application], now: datetime
    ) -> tuple[ExpiringCredentialRecord, ...]:
        """
        Scan all applications at the evaluation instant ``now``.

        Records keep the order in which applications and credentials are
        given. The first failing application raises and stops the scan.

        Raises:
            ScanError: If an application cannot be scanned.
        """
        return tuple(chain.from_iterable(self.scan_application(app, now) for app in applications))

    def scan_application(
        self, application: Application, now: datetime
    ) -> tuple[ExpiringCredentialRecord, ...]:
        """
        Scan the secrets and certificates of one application.

        A credential is kept when ``0 < days_remaining <= window``.
        Credentials without an expiration date are skipped.

        Raises:
            ScanError: If the application's data cannot be evaluated.
        """
        try:
            notify_email = self._resolver.resolve(application)
            records: list[ExpiringCredentialRecord] = []

            for credential in application.credentials:
                if not credential.has_expiration:
                    continue

                days_remaining = credential.days_until_expiry(now)
                if not self._window.contains(days_remaining):
                    continue

                records.append(
                    ExpiringCredentialRecord(
                        app_name=application.display_name,
                        app_id=application.app_id,
                        credential_name=credential.label,
                        kind=credential.credential_type,
                        expires_at=credential.expires_at,
                        days_remaining=days_remaining,
                        notify_email=notify_email,
                    )
                )
        except (AttributeError, TypeError, ValueError) as e:
            raise ScanError(application.app_id, application.display_name, str(e)) from e

        if records:
            logger.debug(
                "Application %s has %d expiring credentials (notify: %s)",
                application.display_name,
                len(records),
                notify_email,
            )
        return tuple(records)
