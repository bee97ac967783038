"""Private (account-scoped) Kraken methods.

Every call here is signed with a fresh nonce. Kraken rejects a nonce that is
not greater than the last one it accepted for the key, so callers issuing
private calls concurrently with the same key must order those calls
themselves; this module does not serialize them.

Methods that take ``args`` accept the free-form string options Kraken
documents for that method. Only the keys listed per method are sent; other
keys are ignored.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from krakenapi.adapters import decode_balances
from krakenapi.client import KrakenClient, Params
from krakenapi.methods import PrivateMethod
from krakenapi.models import (
    AddOrderResponse,
    Balances,
    CancelOrderResponse,
    ClosedOrdersResponse,
    DepositAddress,
    DepositMethod,
    LedgerInfo,
    LedgersResponse,
    OpenOrdersResponse,
    OrderInfo,
    OrderSide,
    OrderType,
    PositionInfo,
    TradeBalance,
    TradeHistoryInfo,
    TradesHistoryResponse,
    TradeVolume,
    TransferStatus,
    WebSocketsToken,
    WithdrawInfo,
    WithdrawResponse,
)

# AddOrder option key -> form field name.
ADD_ORDER_OPTIONS: Mapping[str, str] = {
    "price": "price",
    "price2": "price2",
    "leverage": "leverage",
    "oflags": "oflags",
    "starttm": "starttm",
    "expiretm": "expiretm",
    "validate": "validate",
    "close_order_type": "close[ordertype]",
    "close_price": "close[price]",
    "close_price2": "close[price2]",
    "trading_agreement": "trading_agreement",
    "userref": "userref",
}


def _options(args: Mapping[str, str] | None, keys: Iterable[str]) -> list[tuple[str, str]]:
    """Pick the supported keys out of ``args``, in the documented order."""
    if not args:
        return []
    return [(key, args[key]) for key in keys if key in args]


class PrivateAPI:
    """Account, order and funding endpoints.

    Args:
        client: Dispatcher holding the API credentials.
    """

    def __init__(self, client: KrakenClient) -> None:
        self._client = client

    # ──────────────────────────────────────────────
    # Account
    # ──────────────────────────────────────────────

    def balance(self) -> Balances:
        """Return all asset balances. Fails as a whole if any amount is malformed."""
        result = self._client.query_private(PrivateMethod.BALANCE)
        return decode_balances(result)

    def trade_balance(self, args: Mapping[str, str] | None = None) -> TradeBalance:
        """Return margin trade balance. Options: aclass, asset."""
        return self._query(
            PrivateMethod.TRADE_BALANCE, _options(args, ("aclass", "asset")), TradeBalance
        )

    def trade_volume(self, args: Mapping[str, str] | None = None) -> TradeVolume:
        """Return 30-day volume and fee tiers. Options: pair, fee-info."""
        return self._query(
            PrivateMethod.TRADE_VOLUME, _options(args, ("pair", "fee-info")), TradeVolume
        )

    def get_websockets_token(self) -> WebSocketsToken:
        """Return a token for authenticating private WebSocket feeds."""
        return self._query(PrivateMethod.GET_WEBSOCKETS_TOKEN, [], WebSocketsToken)

    # ──────────────────────────────────────────────
    # Orders and trades
    # ──────────────────────────────────────────────

    def open_orders(self, args: Mapping[str, str] | None = None) -> OpenOrdersResponse:
        """Return open orders. Options: trades, userref."""
        return self._query(
            PrivateMethod.OPEN_ORDERS, _options(args, ("trades", "userref")), OpenOrdersResponse
        )

    def closed_orders(self, args: Mapping[str, str] | None = None) -> ClosedOrdersResponse:
        """Return closed orders. Options: trades, userref, start, end, ofs, closetime."""
        return self._query(
            PrivateMethod.CLOSED_ORDERS,
            _options(args, ("trades", "userref", "start", "end", "ofs", "closetime")),
            ClosedOrdersResponse,
        )

    def query_orders(
        self, txids: str, args: Mapping[str, str] | None = None
    ) -> dict[str, OrderInfo]:
        """Return the orders with the given comma-separated txids."""
        params = [("txid", txids), *_options(args, ("trades", "userref"))]
        return self._query(PrivateMethod.QUERY_ORDERS, params, dict[str, OrderInfo])

    def add_order(
        self,
        pair: str,
        direction: OrderSide | str,
        order_type: OrderType | str,
        volume: str,
        args: Mapping[str, str] | None = None,
    ) -> AddOrderResponse:
        """Place an order.

        Args:
            pair: Asset pair, e.g. "XXBTZUSD".
            direction: "buy" or "sell".
            order_type: "market", "limit", ...
            volume: Order volume in base currency.
            args: Optional settings; see ADD_ORDER_OPTIONS for accepted keys.
                ``close_*`` keys become the conditional close order.
        """
        params: list[tuple[str, object]] = [
            ("pair", pair),
            ("type", direction),
            ("ordertype", order_type),
            ("volume", volume),
        ]
        for key, field_name in ADD_ORDER_OPTIONS.items():
            if args and key in args:
                params.append((field_name, args[key]))
        return self._query(PrivateMethod.ADD_ORDER, params, AddOrderResponse)

    def cancel_order(self, txid: str) -> CancelOrderResponse:
        """Cancel an open order by txid or userref."""
        return self._query(PrivateMethod.CANCEL_ORDER, [("txid", txid)], CancelOrderResponse)

    def trades_history(
        self, start: int = 0, end: int = 0, args: Mapping[str, str] | None = None
    ) -> TradesHistoryResponse:
        """Return account trades between ``start`` and ``end`` (each omitted when 0).

        Options: type, trades, ofs.
        """
        params: list[tuple[str, object]] = []
        if start > 0:
            params.append(("start", start))
        if end > 0:
            params.append(("end", end))
        params.extend(_options(args, ("type", "trades", "ofs")))
        return self._query(PrivateMethod.TRADES_HISTORY, params, TradesHistoryResponse)

    def query_trades(
        self, txids: str, args: Mapping[str, str] | None = None
    ) -> dict[str, TradeHistoryInfo]:
        """Return the trades with the given comma-separated txids."""
        params = [("txid", txids), *_options(args, ("trades",))]
        return self._query(PrivateMethod.QUERY_TRADES, params, dict[str, TradeHistoryInfo])

    def open_positions(self, args: Mapping[str, str] | None = None) -> dict[str, PositionInfo]:
        """Return open margin positions. Options: txid, docalcs, consolidation."""
        return self._query(
            PrivateMethod.OPEN_POSITIONS,
            _options(args, ("txid", "docalcs", "consolidation")),
            dict[str, PositionInfo],
        )

    # ──────────────────────────────────────────────
    # Ledger
    # ──────────────────────────────────────────────

    def ledgers(self, args: Mapping[str, str] | None = None) -> LedgersResponse:
        """Return ledger entries. Options: aclass, asset, type, start, end, ofs."""
        return self._query(
            PrivateMethod.LEDGERS,
            _options(args, ("aclass", "asset", "type", "start", "end", "ofs")),
            LedgersResponse,
        )

    def query_ledgers(
        self, ids: str, args: Mapping[str, str] | None = None
    ) -> dict[str, LedgerInfo]:
        """Return the ledger entries with the given comma-separated ids."""
        params = [("id", ids), *_options(args, ("trades",))]
        return self._query(PrivateMethod.QUERY_LEDGERS, params, dict[str, LedgerInfo])

    # ──────────────────────────────────────────────
    # Funding
    # ──────────────────────────────────────────────

    def deposit_methods(self, asset: str) -> list[DepositMethod]:
        return self._query(PrivateMethod.DEPOSIT_METHODS, [("asset", asset)], list[DepositMethod])

    def deposit_addresses(
        self, asset: str, method: str, args: Mapping[str, str] | None = None
    ) -> list[DepositAddress]:
        """Return deposit addresses. Option ``new`` requests a fresh address."""
        params = [("asset", asset), ("method", method), *_options(args, ("new",))]
        return self._query(PrivateMethod.DEPOSIT_ADDRESSES, params, list[DepositAddress])

    def deposit_status(self, asset: str, method: str = "") -> list[TransferStatus]:
        params = [("asset", asset)]
        if method:
            params.append(("method", method))
        return self._query(PrivateMethod.DEPOSIT_STATUS, params, list[TransferStatus])

    def withdraw_info(self, asset: str, key: str, amount: Decimal) -> WithdrawInfo:
        """Return fee and limit information for a prospective withdrawal."""
        params = [("asset", asset), ("key", key), ("amount", amount)]
        return self._query(PrivateMethod.WITHDRAW_INFO, params, WithdrawInfo)

    def withdraw(self, asset: str, key: str, amount: Decimal) -> WithdrawResponse:
        """Withdraw ``amount`` of ``asset`` to the pre-configured withdrawal ``key``."""
        params = [("asset", asset), ("key", key), ("amount", amount)]
        return self._query(PrivateMethod.WITHDRAW, params, WithdrawResponse)

    def withdraw_status(self, asset: str, method: str = "") -> list[TransferStatus]:
        params = [("asset", asset)]
        if method:
            params.append(("method", method))
        return self._query(PrivateMethod.WITHDRAW_STATUS, params, list[TransferStatus])

    def withdraw_cancel(self, asset: str, refid: str) -> bool:
        """Request cancellation of a pending withdrawal."""
        return self._query(
            PrivateMethod.WITHDRAW_CANCEL, [("asset", asset), ("refid", refid)], bool
        )

    def _query(self, method: PrivateMethod, params: Params, result_type: Any) -> Any:
        return self._client.query_private(method, params, result_type)
