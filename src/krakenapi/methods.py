"""Closed set of Kraken REST method names.

The enum a method belongs to decides how it is dispatched: public methods
go to ``/{version}/public/{name}`` unsigned, private ones to
``/{version}/private/{name}`` with a nonce and signature.
"""

from enum import Enum


class PublicMethod(str, Enum):
    """Unauthenticated market data methods."""

    ASSETS = "Assets"
    ASSET_PAIRS = "AssetPairs"
    DEPTH = "Depth"
    OHLC = "OHLC"
    SPREAD = "Spread"
    TICKER = "Ticker"
    TIME = "Time"
    TRADES = "Trades"

    @property
    def scope(self) -> str:
        return "public"


class PrivateMethod(str, Enum):
    """Account-scoped methods that require a signed request."""

    ADD_ORDER = "AddOrder"
    BALANCE = "Balance"
    CANCEL_ORDER = "CancelOrder"
    CLOSED_ORDERS = "ClosedOrders"
    DEPOSIT_ADDRESSES = "DepositAddresses"
    DEPOSIT_METHODS = "DepositMethods"
    DEPOSIT_STATUS = "DepositStatus"
    GET_WEBSOCKETS_TOKEN = "GetWebSocketsToken"
    LEDGERS = "Ledgers"
    OPEN_ORDERS = "OpenOrders"
    OPEN_POSITIONS = "OpenPositions"
    QUERY_LEDGERS = "QueryLedgers"
    QUERY_ORDERS = "QueryOrders"
    QUERY_TRADES = "QueryTrades"
    TRADE_BALANCE = "TradeBalance"
    TRADES_HISTORY = "TradesHistory"
    TRADE_VOLUME = "TradeVolume"
    WITHDRAW = "Withdraw"
    WITHDRAW_CANCEL = "WithdrawCancel"
    WITHDRAW_INFO = "WithdrawInfo"
    WITHDRAW_STATUS = "WithdrawStatus"

    @property
    def scope(self) -> str:
        return "private"


Method = PublicMethod | PrivateMethod
