"""Microsoft Graph API client for Entra ID."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, ClassVar

import httpx
import msal

from ....application.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GraphClientConfig:
    """Configuration for Microsoft Graph API client."""

    tenant_id: str
    client_id: str
    client_secret: str
    timeout: float = 30.0


class GraphClient:
    """
    Async client for Microsoft Graph API.

    Handles authentication, paginated reads and JSON posts. One client is
    shared by the directory and mail adapters so both use the same token.
    """

    GRAPH_BASE_URL: ClassVar[str] = "https://graph.microsoft.com/v1.0"
    AUTHORITY_BASE: ClassVar[str] = "https://login.microsoftonline.com"
    SCOPE: ClassVar[list[str]] = ["https://graph.microsoft.com/.default"]
    APPLICATION_FIELDS: ClassVar[tuple[str, ...]] = (
        "id",
        "appId",
        "displayName",
        "notes",
        "info",
        "passwordCredentials",
        "keyCredentials",
    )

    def __init__(
        self,
        config: GraphClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Graph client."""
        self._config = config
        self._transport = transport
        self._access_token: str | None = None
        self._token_expiry: datetime | None = None
        self._msal_app: msal.ConfidentialClientApplication | None = None

    def _get_msal_app(self) -> msal.ConfidentialClientApplication:
        """Get or create MSAL application instance."""
        if self._msal_app is None:
            authority = f"{self.AUTHORITY_BASE}/{self._config.tenant_id}"
            self._msal_app = msal.ConfidentialClientApplication(
                client_id=self._config.client_id,
                client_credential=self._config.client_secret,
                authority=authority,
            )
        return self._msal_app

    async def _acquire_token(self) -> str:
        """Acquire access token using client credentials flow."""
        # Check if existing token is still valid
        if self._access_token and self._token_expiry and datetime.now(UTC) < self._token_expiry:
            return self._access_token

        try:
            app = self._get_msal_app()
            result = app.acquire_token_for_client(scopes=self.SCOPE)
        except Exception as e:
            msg = f"Failed to connect to identity provider: {e}"
            raise AuthenticationError(msg) from e

        if "access_token" not in result:
            error = result.get("error_description", result.get("error", "Unknown error"))
            msg = f"Failed to acquire access token: {error}"
            raise AuthenticationError(msg)

        self._access_token = result["access_token"]
        expires_in = result.get("expires_in", 3600)
        # Refresh 5 minutes before expiry
        self._token_expiry = datetime.now(UTC) + timedelta(seconds=expires_in - 300)

        return self._access_token

    async def authenticate(self) -> None:
        """
        Acquire a token up front.

        Raises:
            AuthenticationError: If no token can be acquired.
        """
        await self._acquire_token()
        logger.info("Authenticated against tenant %s", self._config.tenant_id)

    async def get_applications(self) -> list[dict[str, Any]]:
        """
        Retrieve all application registrations.

        Returns:
            List of application dictionaries from Graph API.
        """
        logger.info("Fetching application registrations from Entra ID...")
        select = ",".join(self.APPLICATION_FIELDS)
        applications = await self._get_all_pages(f"/applications?$select={select}")
        logger.info("Found %d application registrations", len(applications))
        return applications

    async def post(self, endpoint: str, payload: dict[str, Any]) -> httpx.Response:
        """
        POST a JSON payload to a Graph endpoint.

        Raises:
            httpx.HTTPError: If the request fails or returns an error status.
        """
        token = await self._acquire_token()
        async with self._http_client() as client:
            response = await client.post(
                self._full_url(endpoint), headers=self._headers(token), json=payload
            )
            response.raise_for_status()
        return response

    async def _get_all_pages(self, endpoint: str) -> list[dict[str, Any]]:
        """
        Retrieve all pages from a paginated Graph API endpoint.

        Args:
            endpoint: The API endpoint path.

        Returns:
            Combined list of all results across pages.
        """
        results: list[dict[str, Any]] = []
        url: str | None = endpoint

        async with self._http_client() as client:
            while url:
                token = await self._acquire_token()
                response = await client.get(self._full_url(url), headers=self._headers(token))
                response.raise_for_status()
                data = response.json()

                results.extend(data.get("value", []))
                url = data.get("@odata.nextLink")

        return results

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._config.timeout, transport=self._transport)

    def _full_url(self, url: str) -> str:
        # Handle both relative and absolute URLs
        return url if url.startswith("http") else f"{self.GRAPH_BASE_URL}{url}"

    @staticmethod
    def _headers(token: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
