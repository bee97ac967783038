"""Typed results returned by the Kraken client.

Two families live here:

* Keyed JSON objects (ticker, order, ledger entry, ...) are frozen pydantic
  models. They are bound straight from the response envelope, with Kraken's
  one-letter keys exposed under readable names through aliases.
* Positional arrays (trade, OHLC candle, order-book level, spread entry) are
  frozen dataclasses built by ``krakenapi.adapters``.

Every result is immutable and owned by the caller once returned.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field


class OrderSide(str, Enum):
    """Order direction."""

    BUY = "buy"
    SELL = "sell"


class OrderType(str, Enum):
    """Order types accepted by AddOrder."""

    MARKET = "market"
    LIMIT = "limit"
    STOP_LOSS = "stop-loss"
    TAKE_PROFIT = "take-profit"
    STOP_LOSS_LIMIT = "stop-loss-limit"
    TAKE_PROFIT_LIMIT = "take-profit-limit"
    SETTLE_POSITION = "settle-position"


class KrakenModel(BaseModel):
    """Base for results bound from JSON objects."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


# ──────────────────────────────────────────────
# Public market data
# ──────────────────────────────────────────────


class ServerTime(KrakenModel):
    unixtime: int
    rfc1123: str


class AssetInfo(KrakenModel):
    altname: str
    aclass: str
    decimals: int
    display_decimals: int
    collateral_value: float | None = None
    status: str | None = None


class AssetPairInfo(KrakenModel):
    """Tradable pair definition from AssetPairs."""

    altname: str
    wsname: str | None = None
    aclass_base: str = "currency"
    base: str
    aclass_quote: str = "currency"
    quote: str
    pair_decimals: int
    cost_decimals: int | None = None
    lot_decimals: int
    lot_multiplier: int = 1
    leverage_buy: list[int] = Field(default_factory=list)
    leverage_sell: list[int] = Field(default_factory=list)
    fees: list[tuple[float, float]] = Field(default_factory=list)  # [volume, percent fee]
    fees_maker: list[tuple[float, float]] = Field(default_factory=list)
    fee_volume_currency: str | None = None
    margin_call: int | None = None
    margin_stop: int | None = None
    ordermin: float | None = None
    costmin: float | None = None
    tick_size: float | None = None
    status: str | None = None


class TickerInfo(KrakenModel):
    """Ticker snapshot for one pair.

    Kraken sends numbers as strings; pydantic's lax mode parses them.
    """

    ask: list[float] = Field(alias="a")  # price, whole lot volume, lot volume
    bid: list[float] = Field(alias="b")
    close: list[float] = Field(alias="c")  # price, lot volume
    volume: list[float] = Field(alias="v")  # today, last 24h
    vwap: list[float] = Field(alias="p")
    trade_count: list[int] = Field(alias="t")
    low: list[float] = Field(alias="l")
    high: list[float] = Field(alias="h")
    opening_price: float = Field(alias="o")


@dataclass(frozen=True)
class Trade:
    """A public trade decoded from its positional array."""

    price: float
    volume: float
    time: int  # unix seconds, truncated
    buy: bool
    sell: bool
    market: bool
    limit: bool
    misc: str
    price_text: str
    volume_text: str
    trade_id: int | None = None


@dataclass(frozen=True)
class TradesResponse:
    pair: str
    last: int  # cursor for the next ``since``
    trades: tuple[Trade, ...]


@dataclass(frozen=True)
class Candle:
    """One OHLC candle."""

    time: int
    open: float
    high: float
    low: float
    close: float
    vwap: float
    volume: float
    count: int


@dataclass(frozen=True)
class OHLCResponse:
    pair: str
    last: int
    candles: tuple[Candle, ...]


@dataclass(frozen=True)
class OrderBookLevel:
    price: float
    volume: float
    timestamp: int


@dataclass(frozen=True)
class OrderBook:
    """Asks and bids in the order the server returned them."""

    asks: tuple[OrderBookLevel, ...]
    bids: tuple[OrderBookLevel, ...]


@dataclass(frozen=True)
class SpreadEntry:
    time: int
    bid: float
    ask: float


@dataclass(frozen=True)
class SpreadResponse:
    pair: str
    last: int
    entries: tuple[SpreadEntry, ...]


# ──────────────────────────────────────────────
# Private account data
# ──────────────────────────────────────────────


class Balances(Mapping[str, float]):
    """Asset code to balance, e.g. ``balances["ZUSD"]``.

    A read-only mapping: compares equal to a dict with the same items and is
    hashable.
    """

    __slots__ = ("_amounts",)

    def __init__(self, amounts: Mapping[str, float] | None = None) -> None:
        self._amounts = MappingProxyType(dict(amounts or {}))

    @property
    def amounts(self) -> Mapping[str, float]:
        return self._amounts

    def __getitem__(self, asset: str) -> float:
        return self._amounts[asset]

    def __iter__(self) -> Iterator[str]:
        return iter(self._amounts)

    def __len__(self) -> int:
        return len(self._amounts)

    def __hash__(self) -> int:
        return hash(frozenset(self._amounts.items()))

    def __repr__(self) -> str:
        return f"Balances({dict(self._amounts)!r})"


class TradeBalance(KrakenModel):
    equivalent_balance: float = Field(alias="eb")
    trade_balance: float = Field(alias="tb")
    margin: float = Field(alias="m")
    unrealized_pnl: float = Field(alias="n")
    cost_basis: float = Field(alias="c")
    floating_valuation: float = Field(alias="v")
    equity: float = Field(alias="e")
    free_margin: float = Field(alias="mf")
    margin_level: float | None = Field(default=None, alias="ml")


class FeeTierInfo(KrakenModel):
    fee: float
    minfee: float
    maxfee: float
    nextfee: float | None = None
    nextvolume: float | None = None
    tiervolume: float | None = None


class TradeVolume(KrakenModel):
    currency: str
    volume: float
    fees: dict[str, FeeTierInfo] | None = None
    fees_maker: dict[str, FeeTierInfo] | None = None


class OrderDescription(KrakenModel):
    pair: str
    side: str = Field(alias="type")
    ordertype: str
    price: float
    price2: float
    leverage: str
    order: str
    close: str | None = None


class OrderInfo(KrakenModel):
    """An open, closed or queried order."""

    refid: str | None = None
    userref: int | None = None
    status: str
    opentm: float
    starttm: float = 0
    expiretm: float = 0
    descr: OrderDescription
    vol: float
    vol_exec: float
    cost: float
    fee: float
    price: float
    stopprice: float | None = None
    limitprice: float | None = None
    misc: str = ""
    oflags: str = ""
    trades: list[str] = Field(default_factory=list)
    closetm: float | None = None
    reason: str | None = None


class OpenOrdersResponse(KrakenModel):
    open: dict[str, OrderInfo]


class ClosedOrdersResponse(KrakenModel):
    closed: dict[str, OrderInfo]
    count: int = 0


class TradeHistoryInfo(KrakenModel):
    ordertxid: str
    postxid: str | None = None
    pair: str
    time: float
    side: str = Field(alias="type")
    ordertype: str
    price: float
    cost: float
    fee: float
    vol: float
    margin: float = 0
    misc: str = ""
    posstatus: str | None = None


class TradesHistoryResponse(KrakenModel):
    trades: dict[str, TradeHistoryInfo]
    count: int = 0


class PositionInfo(KrakenModel):
    ordertxid: str
    posstatus: str
    pair: str
    time: float
    side: str = Field(alias="type")
    ordertype: str
    cost: float
    fee: float
    vol: float
    vol_closed: float
    margin: float
    value: float | None = None
    net: float | None = None
    terms: str | None = None
    rollovertm: float | None = None
    misc: str = ""
    oflags: str = ""


class LedgerInfo(KrakenModel):
    refid: str
    time: float
    entry_type: str = Field(alias="type")
    subtype: str = ""
    aclass: str
    asset: str
    amount: float
    fee: float
    balance: float


class LedgersResponse(KrakenModel):
    ledger: dict[str, LedgerInfo]
    count: int = 0


class AddOrderDescription(KrakenModel):
    order: str
    close: str | None = None


class AddOrderResponse(KrakenModel):
    descr: AddOrderDescription
    txid: list[str] = Field(default_factory=list)  # empty when validate=true


class CancelOrderResponse(KrakenModel):
    count: int
    pending: bool = False


class DepositMethod(KrakenModel):
    method: str
    limit: bool | str = False  # false, or the maximum net amount as a string
    fee: float | None = None
    address_setup_fee: float | None = Field(default=None, alias="address-setup-fee")
    gen_address: bool = Field(default=False, alias="gen-address")


class DepositAddress(KrakenModel):
    address: str
    expiretm: int = 0
    new: bool = False
    tag: str | None = None
    memo: str | None = None


class TransferStatus(KrakenModel):
    """A deposit or withdrawal as reported by DepositStatus / WithdrawStatus."""

    method: str
    aclass: str
    asset: str
    refid: str
    txid: str | None = None
    info: str | None = None
    amount: float
    fee: float = 0
    time: int
    status: str
    status_prop: str | None = Field(default=None, alias="status-prop")


class WithdrawInfo(KrakenModel):
    method: str
    limit: float
    amount: float
    fee: float


class WithdrawResponse(KrakenModel):
    refid: str


class WebSocketsToken(KrakenModel):
    token: str
    expires: int
