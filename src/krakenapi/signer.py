"""Kraken private request signing.

API-Sign = base64(HMAC-SHA512(secret, path + SHA256(nonce + body)))

where ``body`` is the exact URL-encoded POST body (which itself contains
the ``nonce`` field) and ``path`` is the request path including the version
segment, e.g. ``/0/private/Balance``. The signature is path-sensitive, so
the path must match the request URL byte for byte.
"""

import base64
import binascii
import hashlib
import hmac
import time

from krakenapi.logging import get_logger

logger = get_logger(__name__)


def sign(path: str, encoded_params: str, nonce: str, secret: bytes) -> str:
    """Compute the API-Sign header value for a private request.

    Args:
        path: Request path, e.g. "/0/private/AddOrder".
        encoded_params: The URL-encoded request body, nonce included.
        nonce: The nonce value sent in the body.
        secret: The decoded (raw bytes) API secret.

    Returns:
        Base64-encoded HMAC-SHA512 signature.
    """
    digest = hashlib.sha256((nonce + encoded_params).encode("utf-8")).digest()
    mac = hmac.new(secret, path.encode("utf-8") + digest, hashlib.sha512)
    return base64.b64encode(mac.digest()).decode("ascii")


def decode_secret(secret: str) -> bytes:
    """Decode a base64 API secret into the HMAC key.

    A malformed secret is not a local error: it produces an empty key, every
    signature built from it is rejected by Kraken, and the caller sees an
    ``EAPI:Invalid key``-style exchange error on the first private call.
    """
    try:
        return base64.b64decode(secret)
    except (binascii.Error, ValueError):
        logger.warning("malformed_api_secret", note="private calls will fail authentication")
        return b""


def generate_nonce() -> str:
    """Return a nonce from the wall clock in nanoseconds.

    Monotonic within a process as long as the clock does not step back.
    Kraken rejects any nonce not greater than the last one it accepted for
    the key; concurrent callers sharing a key must serialize themselves.
    """
    return str(time.time_ns())
