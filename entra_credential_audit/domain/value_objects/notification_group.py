"""Notification group value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .expiring_credential_record import ExpiringCredentialRecord


@dataclass(frozen=True, slots=True)
class NotificationGroup:
    """Expiring records routed to one owner recipient, in scan order."""

    recipient: str
    records: tuple[ExpiringCredentialRecord, ...]

    def __len__(self) -> int:
        return len(self.records)


def group_by_recipient(
    records: Iterable[ExpiringCredentialRecord],
) -> tuple[NotificationGroup, ...]:
    """
    Group records by their resolved owner recipient.

    Records without a resolved owner are left out. Groups are ordered by the
    first appearance of each recipient and keep the scan order of records.
    Recipients are compared exactly as resolved.
    """
    grouped: dict[str, list[ExpiringCredentialRecord]] = {}
    for record in records:
        if record.has_owner:
            grouped.setdefault(record.notify_email, []).append(record)

    return tuple(
        NotificationGroup(recipient=recipient, records=tuple(items))
        for recipient, items in grouped.items()
    )
