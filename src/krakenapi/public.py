"""Public (unauthenticated) Kraken market data methods."""

from krakenapi.adapters import decode_ohlc, decode_order_book, decode_spread, decode_trades
from krakenapi.client import KrakenClient
from krakenapi.exceptions import UnsupportedIntervalError
from krakenapi.methods import PublicMethod
from krakenapi.models import (
    AssetInfo,
    AssetPairInfo,
    OHLCResponse,
    OrderBook,
    ServerTime,
    SpreadResponse,
    TickerInfo,
    TradesResponse,
)

# Candle widths in minutes accepted by the OHLC endpoint.
OHLC_INTERVALS = frozenset({"1", "5", "15", "30", "60", "240", "1440", "10080", "21600"})


class PublicAPI:
    """Market data endpoints. No credentials are needed.

    Args:
        client: Dispatcher shared with the private API.
    """

    def __init__(self, client: KrakenClient) -> None:
        self._client = client

    def time(self) -> ServerTime:
        """Return the server's time."""
        return self._client.query_public(PublicMethod.TIME, result_type=ServerTime)

    def assets(self, *assets: str) -> dict[str, AssetInfo]:
        """Return asset definitions, all of them when no asset is given."""
        params = [("asset", ",".join(assets))] if assets else []
        return self._client.query_public(
            PublicMethod.ASSETS, params, result_type=dict[str, AssetInfo]
        )

    def asset_pairs(self, *pairs: str) -> dict[str, AssetPairInfo]:
        """Return tradable pair definitions, all of them when no pair is given."""
        params = [("pair", ",".join(pairs))] if pairs else []
        return self._client.query_public(
            PublicMethod.ASSET_PAIRS, params, result_type=dict[str, AssetPairInfo]
        )

    def ticker(self, *pairs: str) -> dict[str, TickerInfo]:
        """Return ticker information for the given pairs."""
        return self._client.query_public(
            PublicMethod.TICKER,
            [("pair", ",".join(pairs))],
            result_type=dict[str, TickerInfo],
        )

    def ohlc(self, pair: str, interval: str | int = "1", since: int = 0) -> OHLCResponse:
        """Return OHLC candles for a pair.

        Args:
            pair: Asset pair, e.g. "XXBTZEUR".
            interval: Candle width in minutes; must be one Kraken supports.
            since: Return candles after this cursor (omitted when 0).

        Raises:
            UnsupportedIntervalError: Before any request is sent.
        """
        interval = str(interval) if interval != "" else "1"
        if interval not in OHLC_INTERVALS:
            raise UnsupportedIntervalError(f"Unsupported value for interval: {interval}")

        params: list[tuple[str, str | int]] = [("pair", pair)]
        if since > 0:
            params.append(("since", since))
        params.append(("interval", interval))

        result = self._client.query_public(PublicMethod.OHLC, params)
        return decode_ohlc(result, pair)

    def ohlc_minutes(self, pair: str) -> OHLCResponse:
        """Return one-minute candles for a pair."""
        return self.ohlc(pair, "1")

    def trades(self, pair: str, since: int = 0) -> TradesResponse:
        """Return recent trades for a pair, after ``since`` when positive."""
        params: list[tuple[str, str | int]] = [("pair", pair)]
        if since > 0:
            params.append(("since", since))
        result = self._client.query_public(PublicMethod.TRADES, params)
        return decode_trades(result, pair)

    def depth(self, pair: str, count: int) -> OrderBook:
        """Return the order book for a pair.

        ``count`` caps the levels per side on the server. The book is returned
        as received; the cap is not re-applied here.
        """
        result = self._client.query_public(
            PublicMethod.DEPTH, [("pair", pair), ("count", count)]
        )
        return decode_order_book(result, pair)

    def spread(self, pair: str, since: int = 0) -> SpreadResponse:
        """Return recent bid/ask spreads for a pair."""
        params: list[tuple[str, str | int]] = [("pair", pair)]
        if since > 0:
            params.append(("since", since))
        result = self._client.query_public(PublicMethod.SPREAD, params)
        return decode_spread(result, pair)
