"""Decoders for Kraken's positionally encoded arrays and numeric maps.

Trades, OHLC candles, order-book levels and spread entries arrive as JSON
arrays whose meaning depends on position, with numbers encoded as strings.
Each decoder checks the arity up front and parses every field strictly: a
row that does not fit raises ``ResponseDecodeError``, it is never skipped
or defaulted.

All functions here are pure. Ordering and counts are taken verbatim from
the server; nothing is sorted, de-duplicated or truncated.
"""

import math
from collections.abc import Mapping, Sequence
from typing import Any

from krakenapi.exceptions import ResponseDecodeError
from krakenapi.models import (
    Balances,
    Candle,
    OHLCResponse,
    OrderBook,
    OrderBookLevel,
    SpreadEntry,
    SpreadResponse,
    Trade,
    TradesResponse,
)

TRADE_FIELDS = 6  # price, volume, time, side, order kind, misc
TRADE_FIELDS_WITH_ID = 7  # current API appends the trade id
CANDLE_FIELDS = 8
BOOK_LEVEL_FIELDS = 3
SPREAD_FIELDS = 3

SIDE_BUY = "b"
SIDE_SELL = "s"
KIND_MARKET = "m"
KIND_LIMIT = "l"


# ──────────────────────────────────────────────
# Field parsers
# ──────────────────────────────────────────────


def _parse_float(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ResponseDecodeError(f"{name}: expected a number, got {value!r}")
    try:
        number = float(value)
    except (ValueError, OverflowError) as exc:
        raise ResponseDecodeError(f"{name}: expected a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise ResponseDecodeError(f"{name}: expected a finite number, got {value!r}")
    return number


def _parse_int(value: Any, name: str) -> int:
    """Parse an integer, truncating float seconds the way Kraken timestamps need."""
    if isinstance(value, bool):
        raise ResponseDecodeError(f"{name}: expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ResponseDecodeError(f"{name}: expected an integer, got {value!r}")
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as exc:
            raise ResponseDecodeError(f"{name}: expected an integer, got {value!r}") from exc
    raise ResponseDecodeError(f"{name}: expected an integer, got {value!r}")


def _parse_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ResponseDecodeError(f"{name}: expected a string, got {value!r}")
    return value


def _check_row(row: Any, arities: tuple[int, ...], name: str) -> Sequence[Any]:
    if not isinstance(row, list):
        raise ResponseDecodeError(f"{name}: expected an array, got {type(row).__name__}")
    if len(row) not in arities:
        expected = " or ".join(str(arity) for arity in arities)
        raise ResponseDecodeError(f"{name}: expected {expected} fields, got {len(row)}")
    return row


def _check_mapping(value: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ResponseDecodeError(f"{name}: expected an object, got {type(value).__name__}")
    return value


def _pair_rows(result: Any, pair: str) -> list[Any]:
    result = _check_mapping(result, "result")
    if pair not in result:
        raise ResponseDecodeError(f"result: pair {pair} missing from response")
    rows = result[pair]
    if not isinstance(rows, list):
        raise ResponseDecodeError(f"{pair}: expected an array of rows")
    return rows


# ──────────────────────────────────────────────
# Row decoders
# ──────────────────────────────────────────────


def decode_trade(row: Any) -> Trade:
    """Decode ``[price, volume, time, side, kind, misc(, trade_id)]``."""
    row = _check_row(row, (TRADE_FIELDS, TRADE_FIELDS_WITH_ID), "trade")

    price_text = _parse_str(row[0], "trade.price")
    volume_text = _parse_str(row[1], "trade.volume")
    side = row[3]
    kind = row[4]
    if side not in (SIDE_BUY, SIDE_SELL):
        raise ResponseDecodeError(f"trade.side: expected 'b' or 's', got {side!r}")
    if kind not in (KIND_MARKET, KIND_LIMIT):
        raise ResponseDecodeError(f"trade.kind: expected 'm' or 'l', got {kind!r}")

    return Trade(
        price=_parse_float(price_text, "trade.price"),
        volume=_parse_float(volume_text, "trade.volume"),
        time=_parse_int(row[2], "trade.time"),
        buy=side == SIDE_BUY,
        sell=side == SIDE_SELL,
        market=kind == KIND_MARKET,
        limit=kind == KIND_LIMIT,
        misc=_parse_str(row[5], "trade.misc"),
        price_text=price_text,
        volume_text=volume_text,
        trade_id=_parse_int(row[6], "trade.id") if len(row) == TRADE_FIELDS_WITH_ID else None,
    )


def decode_candle(row: Any) -> Candle:
    """Decode ``[time, open, high, low, close, vwap, volume, count]``."""
    row = _check_row(row, (CANDLE_FIELDS,), "candle")
    return Candle(
        time=_parse_int(row[0], "candle.time"),
        open=_parse_float(row[1], "candle.open"),
        high=_parse_float(row[2], "candle.high"),
        low=_parse_float(row[3], "candle.low"),
        close=_parse_float(row[4], "candle.close"),
        vwap=_parse_float(row[5], "candle.vwap"),
        volume=_parse_float(row[6], "candle.volume"),
        count=_parse_int(row[7], "candle.count"),
    )


def decode_book_level(row: Any) -> OrderBookLevel:
    """Decode ``[price, volume, timestamp]``."""
    row = _check_row(row, (BOOK_LEVEL_FIELDS,), "book level")
    return OrderBookLevel(
        price=_parse_float(row[0], "level.price"),
        volume=_parse_float(row[1], "level.volume"),
        timestamp=_parse_int(row[2], "level.timestamp"),
    )


def decode_spread_entry(row: Any) -> SpreadEntry:
    """Decode ``[time, bid, ask]``."""
    row = _check_row(row, (SPREAD_FIELDS,), "spread")
    return SpreadEntry(
        time=_parse_int(row[0], "spread.time"),
        bid=_parse_float(row[1], "spread.bid"),
        ask=_parse_float(row[2], "spread.ask"),
    )


def decode_balances(result: Any) -> Balances:
    """Decode ``{asset: "amount"}``. One bad value fails the whole map."""
    result = _check_mapping(result, "balance")
    return Balances(
        {asset: _parse_float(amount, f"balance.{asset}") for asset, amount in result.items()}
    )


# ──────────────────────────────────────────────
# Result decoders
# ──────────────────────────────────────────────


def decode_trades(result: Any, pair: str) -> TradesResponse:
    """Decode a Trades result: ``{pair: [rows], "last": "<cursor>"}``."""
    rows = _pair_rows(result, pair)
    return TradesResponse(
        pair=pair,
        last=_parse_int(result.get("last"), "trades.last"),
        trades=tuple(decode_trade(row) for row in rows),
    )


def decode_ohlc(result: Any, pair: str) -> OHLCResponse:
    """Decode an OHLC result: ``{pair: [rows], "last": <time>}``."""
    rows = _pair_rows(result, pair)
    return OHLCResponse(
        pair=pair,
        last=_parse_int(result.get("last"), "ohlc.last"),
        candles=tuple(decode_candle(row) for row in rows),
    )


def decode_order_book(result: Any, pair: str) -> OrderBook:
    """Decode a Depth result: ``{pair: {"asks": [rows], "bids": [rows]}}``.

    Every level is decoded, however many the server sent.
    """
    result = _check_mapping(result, "result")
    if pair not in result:
        raise ResponseDecodeError(f"result: pair {pair} missing from response")
    book = _check_mapping(result[pair], pair)

    sides: dict[str, tuple[OrderBookLevel, ...]] = {}
    for side in ("asks", "bids"):
        if side not in book:
            raise ResponseDecodeError(f"{pair}: missing {side}")
        rows = book[side]
        if not isinstance(rows, list):
            raise ResponseDecodeError(f"{pair}.{side}: expected an array of levels")
        sides[side] = tuple(decode_book_level(row) for row in rows)
    return OrderBook(asks=sides["asks"], bids=sides["bids"])


def decode_spread(result: Any, pair: str) -> SpreadResponse:
    """Decode a Spread result: ``{pair: [rows], "last": <time>}``."""
    rows = _pair_rows(result, pair)
    return SpreadResponse(
        pair=pair,
        last=_parse_int(result.get("last"), "spread.last"),
        entries=tuple(decode_spread_entry(row) for row in rows),
    )
