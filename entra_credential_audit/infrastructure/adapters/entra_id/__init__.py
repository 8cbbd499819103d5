"""Entra ID adapters."""

from .graph_client import GraphClient, GraphClientConfig
from .repository import EntraIdApplicationDirectory

__all__ = [
    "EntraIdApplicationDirectory",
    "GraphClient",
    "GraphClientConfig",
]
