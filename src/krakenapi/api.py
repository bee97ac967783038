"""Entry point object bundling the public and private Kraken APIs."""

from types import TracebackType

import httpx

from krakenapi.client import Credentials, KrakenClient
from krakenapi.config import AppSettings, KrakenSettings
from krakenapi.logging import setup_logging
from krakenapi.private import PrivateAPI
from krakenapi.public import PublicAPI


class KrakenAPI:
    """Kraken REST API client.

    Usage:
        with KrakenAPI(key, secret) as api:
            server_time = api.public.time()
            balances = api.private.balance()

    Args:
        key: API key. May be empty for public-only use.
        secret: Base64 API secret.
        http_client: Optional ``httpx.Client`` to send requests with; its
            lifetime stays with the caller.
        settings: Endpoint, user agent and timeout overrides.
    """

    def __init__(
        self,
        key: str = "",
        secret: str = "",
        http_client: httpx.Client | None = None,
        settings: KrakenSettings | None = None,
    ) -> None:
        credentials = Credentials(api_key=key, api_secret=secret) if key else None
        self._client = KrakenClient(
            settings=settings,
            credentials=credentials,
            http_client=http_client,
        )
        self.public = PublicAPI(self._client)
        self.private = PrivateAPI(self._client)

    @classmethod
    def from_settings(
        cls, settings: KrakenSettings, http_client: httpx.Client | None = None
    ) -> "KrakenAPI":
        """Build a client from settings, typically loaded from KRAKEN_* variables."""
        credentials = Credentials.from_settings(settings)
        return cls(
            key=credentials.api_key if credentials else "",
            secret=credentials.api_secret if credentials else "",
            http_client=http_client,
            settings=settings,
        )

    @property
    def client(self) -> KrakenClient:
        """The request dispatcher shared by both APIs."""
        return self._client

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "KrakenAPI":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def create_api(
    settings: AppSettings | None = None, http_client: httpx.Client | None = None
) -> KrakenAPI:
    """Load application settings, configure logging and build the client.

    Intended for applications; libraries embedding the client should build
    ``KrakenAPI`` directly and leave logging alone.
    """
    settings = settings or AppSettings()
    setup_logging(settings.log_level)
    return KrakenAPI.from_settings(settings.kraken, http_client=http_client)
