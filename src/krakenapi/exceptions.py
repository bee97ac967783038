"""Custom exceptions for the Kraken API client.

Every failure of a remote call surfaces as exactly one of these. Nothing is
retried or defaulted: the caller gets the error of the call that failed.
"""

from collections.abc import Iterable


class KrakenError(Exception):
    """Base exception for all Kraken client errors."""


class KrakenTransportError(KrakenError):
    """Raised when the HTTP request itself fails (connection, DNS, TLS, timeout)."""


class KrakenProtocolError(KrakenError):
    """Raised when the response is not a well-formed Kraken envelope."""


class UnexpectedContentTypeError(KrakenProtocolError):
    """Raised when the response is not served as application/json.

    Kraken's edge serves HTML error pages with a 200 status on some failures;
    those must never reach the JSON decoder.
    """

    def __init__(self, content_type: str) -> None:
        self.content_type = content_type
        super().__init__(
            f"Response Content-Type is '{content_type}', but should be 'application/json'"
        )


class MalformedResponseError(KrakenProtocolError):
    """Raised when the response body is not valid JSON or not an envelope."""


class KrakenExchangeError(KrakenError):
    """Raised when Kraken answers with a non-empty error list.

    Carries the server's literal error strings, e.g. ``EOrder:Unknown order``.
    """

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = tuple(errors)
        super().__init__(", ".join(self.errors))


class ResponseDecodeError(KrakenError):
    """Raised when a result cannot be interpreted as the expected shape."""


class MissingCredentialsError(KrakenError):
    """Raised when a private method is called without API credentials."""


class UnsupportedIntervalError(KrakenError, ValueError):
    """Raised when an OHLC interval is not one Kraken supports."""
