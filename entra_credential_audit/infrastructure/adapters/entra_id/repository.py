"""Entra ID application directory implementation."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from ....application.exceptions import AuthenticationError, DirectoryQueryError
from ....domain.entities import Application, Credential
from ....domain.value_objects import CredentialType
from .graph_client import GraphClient

logger = logging.getLogger(__name__)


class EntraIdApplicationDirectory:
    """
    Application directory implementation using Microsoft Graph API.

    Implements the ApplicationDirectory port for Entra ID.
    """

    def __init__(self, client: GraphClient) -> None:
        """
        Initialize the directory.

        Args:
            client: Graph API client, shared with the mail adapter.
        """
        self._client = client

    async def authenticate(self) -> None:
        """Acquire the Graph token; raises AuthenticationError on failure."""
        await self._client.authenticate()

    async def list_applications(self) -> list[Application]:
        """
        Retrieve all application registrations with their credentials.

        Returns:
            Applications in the order the directory returns them.

        Raises:
            DirectoryQueryError: If retrieval fails.
        """
        try:
            raw_applications = await self._client.get_applications()
        except AuthenticationError:
            raise
        except Exception as e:
            msg = f"Failed to list application registrations from Entra ID: {e}"
            logger.exception(msg)
            raise DirectoryQueryError(msg) from e

        applications = [self._map_application(raw) for raw in raw_applications]
        logger.info(
            "Retrieved %d credentials from %d app registrations",
            sum(len(app.credentials) for app in applications),
            len(applications),
        )
        return applications

    def _map_application(self, raw: dict[str, Any]) -> Application:
        """Map raw Graph API application data to domain entity."""
        app_name = raw.get("displayName") or "Unknown"
        info = raw.get("info") or {}

        # Secrets first, then certificates, each in directory order
        credentials = [
            self._map_credential(cred, CredentialType.SECRET, app_name)
            for cred in raw.get("passwordCredentials") or []
        ]
        credentials.extend(
            self._map_credential(cred, CredentialType.CERTIFICATE, app_name)
            for cred in raw.get("keyCredentials") or []
        )

        return Application(
            app_id=raw.get("appId", ""),
            display_name=app_name,
            object_id=raw.get("id", ""),
            notes=raw.get("notes"),
            info_notes=info.get("notes") if isinstance(info, dict) else None,
            credentials=tuple(credentials),
        )

    def _map_credential(
        self,
        raw: dict[str, Any],
        credential_type: CredentialType,
        app_name: str,
    ) -> Credential:
        """
        Map raw Graph API credential data to domain entity.

        Args:
            raw: Raw credential dictionary from Graph API.
            credential_type: Type of credential.
            app_name: Application display name, for logging.

        Returns:
            Credential entity; ``expires_at`` is None when absent or unreadable.
        """
        expiry_str = raw.get("endDateTime")
        expires_at = self._parse_datetime(expiry_str) if expiry_str else None
        if expires_at is None:
            logger.warning(
                "Credential %s in app registration %s has no usable expiry date",
                raw.get("keyId", "unknown"),
                app_name,
            )

        return Credential(
            credential_type=credential_type,
            display_name=raw.get("displayName"),
            expires_at=expires_at,
            key_id=raw.get("keyId") or "",
        )

    @staticmethod
    def _parse_datetime(dt_string: str) -> datetime | None:
        """Parse ISO datetime string to datetime object."""
        try:
            # Handle various formats from Graph API
            dt_string = dt_string.replace("Z", "+00:00")
            dt = datetime.fromisoformat(dt_string)
            # Ensure timezone-aware
            return dt if dt.tzinfo else dt.replace(tzinfo=UTC)
        except ValueError:
            logger.warning("Failed to parse datetime: %s", dt_string)
            return None
