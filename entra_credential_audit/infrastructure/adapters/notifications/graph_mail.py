"""Mail sender using the Microsoft Graph sendMail API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ....application.exceptions import AuthenticationError, DispatchError

if TYPE_CHECKING:
    from ..entra_id import GraphClient


@dataclass(frozen=True, slots=True)
class GraphMailConfig:
    """Microsoft Graph mail configuration."""

    from_address: str = ""  # Sender mailbox (app needs Mail.Send permission)
    save_to_sent_items: bool = False


class GraphMailSender:
    """Send one HTML message per call via Microsoft Graph API."""

    def __init__(self, client: GraphClient, config: GraphMailConfig) -> None:
        """Initialize the Graph mail sender."""
        self._client = client
        self._config = config
        self._logger = logging.getLogger(self.__class__.__name__)

    def is_configured(self) -> bool:
        """Check if a sender mailbox is configured."""
        return bool(self._config.from_address)

    async def send_mail(self, recipient: str, subject: str, html_body: str) -> None:
        """
        Send an email via Graph API.

        Raises:
            DispatchError: If the sender is not configured or Graph rejects the call.
        """
        if not self.is_configured():
            raise DispatchError(recipient, "no sender mailbox configured")

        message = self.build_message(recipient, subject, html_body)
        try:
            await self._client.post(f"/users/{self._config.from_address}/sendMail", message)
        except AuthenticationError as e:
            raise DispatchError(recipient, str(e)) from e
        except Exception as e:
            self._logger.exception("Failed to send Graph email to %s", recipient)
            raise DispatchError(recipient, str(e)) from e

        self._logger.info("Graph email sent to %s", recipient)

    def build_message(self, recipient: str, subject: str, html_body: str) -> dict[str, Any]:
        """Build the Graph API email message payload."""
        return {
            "message": {
                "subject": subject,
                "body": {
                    "contentType": "HTML",
                    "content": html_body,
                },
                "toRecipients": [{"emailAddress": {"address": recipient}}],
            },
            "saveToSentItems": self._config.save_to_sent_items,
        }
