"""Notification sender adapter implementations."""

from .graph_mail import GraphMailConfig, GraphMailSender

__all__ = [
    "GraphMailConfig",
    "GraphMailSender",
]
