"""Shared test fixtures for the Kraken client.

HTTP never leaves the process: requests go through ``httpx.MockTransport``
into ``FakeKraken``, which records them and answers with a canned response.
"""

import json
from collections.abc import Iterator
from typing import Any
from urllib.parse import parse_qsl

import httpx
import pytest

from krakenapi.client import Credentials, KrakenClient
from krakenapi.config import KrakenSettings
from krakenapi.private import PrivateAPI
from krakenapi.public import PublicAPI

# Key pair and nonce from Kraken's REST authentication guide.
API_KEY = "test-api-key"
API_SECRET = "kQH5HW/8p1uGOVjbgWA7FunAmGO8lsSUXNsu3eow76sz84Q18fWxnyRzBHCd3pd5nE9qa99HAZtuZuj6F1huXg=="
FIXED_NONCE = "1616492376594"


class FakeKraken:
    """Records requests and replies with the configured response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._status = 200
        self._body = b'{"error":[],"result":{}}'
        self._headers = {"Content-Type": "application/json"}
        self._raise: Exception | None = None

    def reply(self, result: Any = None, error: list[str] | None = None) -> None:
        """Answer with a JSON envelope."""
        payload: dict[str, Any] = {"error": error or []}
        if result is not None:
            payload["result"] = result
        self.reply_raw(json.dumps(payload).encode())

    def reply_raw(
        self,
        body: bytes,
        content_type: str = "application/json",
        status: int = 200,
    ) -> None:
        self._status = status
        self._body = body
        self._headers = {"Content-Type": content_type}

    def fail_with(self, exc: Exception) -> None:
        self._raise = exc

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._raise is not None:
            raise self._raise
        return httpx.Response(self._status, content=self._body, headers=self._headers)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_form(self) -> list[tuple[str, str]]:
        """The last request body as ordered (key, value) pairs."""
        return parse_qsl(self.last_request.content.decode(), keep_blank_values=True)


@pytest.fixture
def kraken_settings() -> KrakenSettings:
    """Settings with test defaults (dummy key, default endpoint)."""
    return KrakenSettings(
        api_key=API_KEY,  # type: ignore[arg-type]
        api_secret=API_SECRET,  # type: ignore[arg-type]
    )


@pytest.fixture
def fake_kraken() -> FakeKraken:
    return FakeKraken()


@pytest.fixture
def http_client(fake_kraken: FakeKraken) -> Iterator[httpx.Client]:
    client = httpx.Client(transport=httpx.MockTransport(fake_kraken.handle))
    yield client
    client.close()


@pytest.fixture
def kraken_client(kraken_settings: KrakenSettings, http_client: httpx.Client) -> KrakenClient:
    """Dispatcher with credentials and a fixed nonce."""
    return KrakenClient(
        settings=kraken_settings,
        credentials=Credentials(api_key=API_KEY, api_secret=API_SECRET),
        http_client=http_client,
        nonce_factory=lambda: FIXED_NONCE,
    )


@pytest.fixture
def public_api(kraken_client: KrakenClient) -> PublicAPI:
    return PublicAPI(kraken_client)


@pytest.fixture
def private_api(kraken_client: KrakenClient) -> PrivateAPI:
    return PrivateAPI(kraken_client)
