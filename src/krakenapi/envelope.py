"""Kraken response envelope decoding.

Every Kraken response has the shape ``{"error": [...], "result": ...}``.
``decode`` binds ``result`` straight to the type the caller expects, so a
successful call never passes through an untyped intermediate, and turns a
non-empty ``error`` list into ``KrakenExchangeError``.
"""

from typing import Any, Generic, NoReturn, TypeVar, overload

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from krakenapi.exceptions import (
    KrakenExchangeError,
    MalformedResponseError,
    ResponseDecodeError,
)

ResultT = TypeVar("ResultT")


class Envelope(BaseModel, Generic[ResultT]):
    """The outer structure wrapping every Kraken response."""

    model_config = ConfigDict(frozen=True)

    error: list[str] = Field(default_factory=list)
    result: ResultT | None = None


@overload
def decode(body: bytes, result_type: None = None) -> Any: ...


@overload
def decode(body: bytes, result_type: type[ResultT]) -> ResultT: ...


def decode(body: bytes, result_type: Any = None) -> Any:
    """Decode a raw response body into its result.

    Args:
        body: Raw HTTP response body.
        result_type: Type to bind ``result`` to. ``None`` leaves it as the
            plain JSON tree (dicts, lists, strings, numbers) for the
            positional adapters to interpret.

    Returns:
        The decoded result.

    Raises:
        KrakenExchangeError: The envelope carries one or more errors.
        MalformedResponseError: The body is not JSON or not an envelope.
        ResponseDecodeError: ``result`` does not match ``result_type``.
    """
    envelope_type = Envelope[Any] if result_type is None else Envelope[result_type]

    try:
        envelope = envelope_type.model_validate_json(body)
    except ValidationError as exc:
        _raise_for_invalid(body, exc)

    if envelope.error:
        raise KrakenExchangeError(envelope.error)
    if envelope.result is None:
        raise MalformedResponseError("Response envelope has neither error nor result")
    return envelope.result


def _raise_for_invalid(body: bytes, exc: ValidationError) -> NoReturn:
    """Classify a failed envelope validation into the right error."""
    details = exc.errors()
    if any(detail["type"] == "json_invalid" for detail in details):
        raise MalformedResponseError(f"Response is not valid JSON: {exc}") from exc

    if not all(detail["loc"][:1] == ("result",) for detail in details):
        raise MalformedResponseError(f"Response is not a Kraken envelope: {exc}") from exc

    # Only ``result`` failed to bind; the error list may explain why.
    envelope = Envelope[Any].model_validate_json(body)
    if envelope.error:
        raise KrakenExchangeError(envelope.error) from exc
    raise ResponseDecodeError(f"Unexpected result shape: {exc}") from exc
