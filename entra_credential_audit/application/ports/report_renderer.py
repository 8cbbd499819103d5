"""Port for report rendering."""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from ...domain.value_objects import ExpiringCredentialRecord, NotificationGroup


class ReportRenderer(Protocol):
    """Port for turning expiring records into a readable document."""

    def render_admin_report(
        self, records: Sequence[ExpiringCredentialRecord], generated_at: datetime
    ) -> str:
        """Render the consolidated administrator report."""
        ...

    def render_owner_report(self, group: NotificationGroup, generated_at: datetime) -> str:
        """Render the simplified report for one owner recipient."""
        ...
