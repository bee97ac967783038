"""Request dispatcher for the Kraken REST API.

Builds and sends exactly one POST per call over an ``httpx.Client``:

    POST {base_url}/{version}/{public|private}/{Method}
    Content-Type: application/x-www-form-urlencoded

Private calls get a fresh nonce prepended to the body and the ``API-Key`` /
``API-Sign`` headers. The response must be served as application/json and
is handed to the envelope decoder. There is no retry, rate limiting or
status-code handling: Kraken reports failures inside the envelope.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import TracebackType
from typing import Any
from urllib.parse import urlencode

import httpx

from krakenapi.config import KrakenSettings
from krakenapi.envelope import decode
from krakenapi.exceptions import (
    KrakenError,
    KrakenTransportError,
    MissingCredentialsError,
    UnexpectedContentTypeError,
)
from krakenapi.logging import get_logger
from krakenapi.methods import Method, PrivateMethod, PublicMethod
from krakenapi.signer import decode_secret, generate_nonce, sign

logger = get_logger(__name__)

JSON_MEDIA_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

Params = Sequence[tuple[str, Any]]


@dataclass(frozen=True)
class Credentials:
    """Kraken API key pair. Kept out of repr so it never reaches logs."""

    api_key: str = field(repr=False)
    api_secret: str = field(repr=False)  # base64, as issued by Kraken

    @classmethod
    def from_settings(cls, settings: KrakenSettings) -> "Credentials | None":
        """Build credentials from settings, or None when no key is configured."""
        api_key = settings.api_key.get_secret_value()
        if not api_key:
            return None
        return cls(api_key=api_key, api_secret=settings.api_secret.get_secret_value())


def format_param(value: Any) -> str:
    """Render a parameter value the way Kraken expects it in a form body."""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


class KrakenClient:
    """Sends public and signed private requests and decodes their results.

    The client keeps no per-call state: credentials and settings are
    immutable and ``httpx.Client`` is safe to share, so one instance may serve
    concurrent callers. Nonces are not serialized across those callers.

    Args:
        settings: Endpoint, user agent and timeout configuration.
        credentials: API key pair; required only for private methods.
        http_client: Transport to send requests with. When omitted, the
            client creates (and later closes) its own.
        nonce_factory: Source of nonces for private calls.
    """

    def __init__(
        self,
        settings: KrakenSettings | None = None,
        credentials: Credentials | None = None,
        http_client: httpx.Client | None = None,
        nonce_factory: Callable[[], str] = generate_nonce,
    ) -> None:
        self._settings = settings or KrakenSettings()
        self._credentials = credentials
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(timeout=self._settings.timeout)
        self._nonce_factory = nonce_factory

    @property
    def has_credentials(self) -> bool:
        return self._credentials is not None

    def method_path(self, method: Method) -> str:
        """Return the request path for a method, e.g. ``/0/private/Balance``."""
        return f"/{self._settings.api_version}/{method.scope}/{method.value}"

    def method_url(self, method: Method) -> str:
        return self._settings.base_url.rstrip("/") + self.method_path(method)

    def query_public(
        self, method: PublicMethod, params: Params | None = None, result_type: Any = None
    ) -> Any:
        """Execute a public method."""
        if not isinstance(method, PublicMethod):
            raise TypeError(f"{method!r} is not a public method")
        return self.execute(method, params, result_type)

    def query_private(
        self, method: PrivateMethod, params: Params | None = None, result_type: Any = None
    ) -> Any:
        """Execute a private method."""
        if not isinstance(method, PrivateMethod):
            raise TypeError(f"{method!r} is not a private method")
        return self.execute(method, params, result_type)

    def execute(
        self, method: Method, params: Params | None = None, result_type: Any = None
    ) -> Any:
        """Send one request for ``method`` and return its decoded result.

        Args:
            method: The remote method; its enum decides public vs. private.
            params: Ordered request parameters (nonce excluded).
            result_type: Type to bind the envelope's result to, or None for
                the raw JSON tree.

        Raises:
            MissingCredentialsError: Private method without credentials.
            KrakenTransportError: The HTTP exchange failed.
            UnexpectedContentTypeError: The response is not JSON.
            MalformedResponseError: The body is not a Kraken envelope.
            KrakenExchangeError: Kraken returned errors.
            ResponseDecodeError: The result does not have the expected shape.
        """
        path = self.method_path(method)
        pairs = [(key, format_param(value)) for key, value in params or ()]
        headers = {
            "User-Agent": self._settings.user_agent,
            "Content-Type": FORM_CONTENT_TYPE,
        }

        if isinstance(method, PrivateMethod):
            credentials = self._require_credentials(method)
            nonce = self._nonce_factory()
            body = urlencode([("nonce", nonce), *pairs])
            headers["API-Key"] = credentials.api_key
            headers["API-Sign"] = sign(path, body, nonce, decode_secret(credentials.api_secret))
        else:
            body = urlencode(pairs)

        logger.debug("kraken_request", method=method.value, scope=method.scope, params=len(pairs))

        try:
            response = self._http.post(self.method_url(method), content=body, headers=headers)
        except httpx.TransportError as exc:
            logger.debug("kraken_transport_failed", method=method.value, error=str(exc))
            raise KrakenTransportError(f"Could not execute {method.value}: {exc}") from exc

        try:
            _check_content_type(response)
            return decode(response.content, result_type)
        except KrakenError as exc:
            logger.debug(
                "kraken_request_failed",
                method=method.value,
                status=response.status_code,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            self._http.close()

    def __enter__(self) -> "KrakenClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _require_credentials(self, method: PrivateMethod) -> Credentials:
        if self._credentials is None:
            raise MissingCredentialsError(f"{method.value} is private and needs API credentials")
        return self._credentials


def _check_content_type(response: httpx.Response) -> None:
    content_type = response.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type != JSON_MEDIA_TYPE:
        raise UnexpectedContentTypeError(media_type)
