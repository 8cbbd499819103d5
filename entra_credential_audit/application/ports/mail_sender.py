"""Port for mail sending - driven/secondary port."""

from typing import Protocol


class MailSender(Protocol):
    """
    Port for sending an HTML message to a single recipient.

    This is a driven (secondary) port that defines how the application
    delivers rendered reports.
    """

    async def send_mail(self, recipient: str, subject: str, html_body: str) -> None:
        """
        Send one message.

        Raises:
            DispatchError: If sending fails.
        """
        ...
