"""Sends rendered reports through the mail port."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..exceptions import DispatchError
from ..outcome import Failure, Outcome, Phase, Success

if TYPE_CHECKING:
    from ...domain.entities import AuditReport
    from ...domain.value_objects import NotificationGroup, WarningWindow
    from ..ports import MailSender

logger = logging.getLogger(__name__)


def admin_subject(report: AuditReport) -> str:
    """Subject line of the consolidated administrator report."""
    return (
        f"Entra ID App Credentials Report - {report.total_count} expiring "
        f"within {report.warning_window.days} days"
    )


def owner_subject(group: NotificationGroup, warning_window: WarningWindow) -> str:
    """Subject line of an owner alert."""
    return (
        f"Action required: {len(group)} app credential(s) expiring "
        f"within {warning_window.days} days"
    )


class NotificationDispatcher:
    """Delivers rendered content to recipients, one mail per call."""

    def __init__(self, mail_sender: MailSender) -> None:
        """Initialize dispatcher with the mail-sending adapter."""
        self._sender = mail_sender

    async def send_report(self, recipient: str, html_body: str, subject: str) -> None:
        """
        Send one report to one recipient.

        Raises:
            DispatchError: If the mail collaborator fails.
        """
        await self._sender.send_mail(recipient, subject, html_body)
        logger.info("Report '%s' sent to %s", subject, recipient)

    async def deliver(self, recipient: str, html_body: str, subject: str) -> Outcome[str]:
        """Send one report and return the outcome instead of raising."""
        try:
            await self.send_report(recipient, html_body, subject)
        except DispatchError as e:
            logger.error("Dispatch to %s failed: %s", recipient, e)
            return Failure(phase=Phase.DISPATCH, error=e, subject=recipient)
        return Success(recipient)
