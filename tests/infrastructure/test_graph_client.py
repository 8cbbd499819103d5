"""Tests for the Graph API client."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest

from entra_credential_audit.application.exceptions import AuthenticationError
from entra_credential_audit.infrastructure.adapters.entra_id import GraphClient, GraphClientConfig

CONFIG = GraphClientConfig(tenant_id="tenant", client_id="client", client_secret="secret")


class StubMsalApp:
    """Stands in for msal.ConfidentialClientApplication."""

    def __init__(self, result: dict[str, Any] | Exception) -> None:
        self.result = result
        self.calls = 0

    def acquire_token_for_client(self, scopes: list[str]) -> dict[str, Any]:
        self.calls += 1
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def _client(
    monkeypatch: pytest.MonkeyPatch,
    handler: Any = None,
    token_result: dict[str, Any] | Exception | None = None,
) -> tuple[GraphClient, StubMsalApp]:
    transport = httpx.MockTransport(handler) if handler else None
    client = GraphClient(CONFIG, transport=transport)
    stub = StubMsalApp(token_result or {"access_token": "token-123", "expires_in": 3600})
    monkeypatch.setattr(client, "_get_msal_app", lambda: stub)
    return client, stub


class TestAuthentication:
    """Tests for token acquisition."""

    def test_authenticate_caches_token(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A second call reuses the cached token."""
        client, stub = _client(monkeypatch)

        asyncio.run(client.authenticate())
        asyncio.run(client.authenticate())

        assert stub.calls == 1

    def test_error_payload_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """MSAL error payloads become AuthenticationError."""
        client, _ = _client(
            monkeypatch,
            token_result={"error": "invalid_client", "error_description": "AADSTS7000215: bad secret"},
        )

        with pytest.raises(AuthenticationError, match="AADSTS7000215"):
            asyncio.run(client.authenticate())

    def test_connect_failure_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Exceptions from MSAL become AuthenticationError."""
        client, _ = _client(monkeypatch, token_result=ConnectionError("no route to host"))

        with pytest.raises(AuthenticationError, match="no route to host"):
            asyncio.run(client.authenticate())


class TestRequests:
    """Tests for Graph HTTP calls."""

    def test_get_applications_follows_next_link(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """All pages are combined in order."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if "skiptoken" in str(request.url):
                return httpx.Response(200, json={"value": [{"appId": "2"}]})
            return httpx.Response(
                200,
                json={
                    "value": [{"appId": "1"}],
                    "@odata.nextLink": "https://graph.microsoft.com/v1.0/applications?$skiptoken=abc",
                },
            )

        client, _ = _client(monkeypatch, handler)

        applications = asyncio.run(client.get_applications())

        assert [a["appId"] for a in applications] == ["1", "2"]
        assert requests[0].url.path == "/v1.0/applications"
        assert "notes" in requests[0].url.params["$select"]
        assert requests[0].headers["Authorization"] == "Bearer token-123"

    def test_error_status_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """HTTP errors propagate as httpx errors."""
        client, _ = _client(monkeypatch, lambda request: httpx.Response(403, json={}))

        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(client.get_applications())

    def test_post_sends_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """post sends the payload to the Graph URL."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(202)

        client, _ = _client(monkeypatch, handler)

        response = asyncio.run(client.post("/users/a@x.com/sendMail", {"message": {}}))

        assert response.status_code == 202
        assert str(seen[0].url) == "https://graph.microsoft.com/v1.0/users/a@x.com/sendMail"
        assert json.loads(seen[0].content) == {"message": {}}
