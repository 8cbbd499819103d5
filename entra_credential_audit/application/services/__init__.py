"""Application services."""

from .notification_dispatcher import NotificationDispatcher, admin_subject, owner_subject

__all__ = [
    "NotificationDispatcher",
    "admin_subject",
    "owner_subject",
]
