"""Kraken REST API client -- signed requests and typed response decoding."""

from krakenapi.api import KrakenAPI, create_api
from krakenapi.client import Credentials, KrakenClient
from krakenapi.config import AppSettings, KrakenSettings
from krakenapi.exceptions import (
    KrakenError,
    KrakenExchangeError,
    KrakenProtocolError,
    KrakenTransportError,
    MalformedResponseError,
    MissingCredentialsError,
    ResponseDecodeError,
    UnexpectedContentTypeError,
    UnsupportedIntervalError,
)
from krakenapi.methods import PrivateMethod, PublicMethod
from krakenapi.private import PrivateAPI
from krakenapi.public import PublicAPI

__all__ = [
    "AppSettings",
    "Credentials",
    "KrakenAPI",
    "KrakenClient",
    "KrakenError",
    "KrakenExchangeError",
    "KrakenProtocolError",
    "KrakenSettings",
    "KrakenTransportError",
    "MalformedResponseError",
    "MissingCredentialsError",
    "PrivateAPI",
    "PrivateMethod",
    "PublicAPI",
    "PublicMethod",
    "ResponseDecodeError",
    "UnexpectedContentTypeError",
    "UnsupportedIntervalError",
    "create_api",
]
