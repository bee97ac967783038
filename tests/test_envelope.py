"""Tests for response envelope decoding."""

from typing import Any

import pytest

from krakenapi.envelope import decode
from krakenapi.exceptions import (
    KrakenExchangeError,
    MalformedResponseError,
    ResponseDecodeError,
)
from krakenapi.models import AssetInfo, ServerTime, TradeBalance


class TestExchangeErrors:
    """A non-empty error list always wins over the result."""

    def test_error_with_null_result(self) -> None:
        body = b'{"error":["EOrder:Unknown order"],"result":null}'
        with pytest.raises(KrakenExchangeError, match="EOrder:Unknown order") as exc_info:
            decode(body, ServerTime)
        assert exc_info.value.errors == ("EOrder:Unknown order",)

    def test_error_without_result_key(self) -> None:
        with pytest.raises(KrakenExchangeError):
            decode(b'{"error":["EGeneral:Invalid arguments"]}')

    def test_multiple_errors_are_joined(self) -> None:
        body = b'{"error":["EGeneral:Invalid arguments","EAPI:Invalid nonce"]}'
        with pytest.raises(KrakenExchangeError) as exc_info:
            decode(body)
        assert str(exc_info.value) == "EGeneral:Invalid arguments, EAPI:Invalid nonce"
        assert exc_info.value.errors == ("EGeneral:Invalid arguments", "EAPI:Invalid nonce")

    def test_error_wins_over_unbindable_result(self) -> None:
        body = b'{"error":["EAPI:Invalid key"],"result":{}}'
        with pytest.raises(KrakenExchangeError, match="EAPI:Invalid key"):
            decode(body, TradeBalance)

    def test_error_wins_over_valid_result(self) -> None:
        body = b'{"error":["EService:Busy"],"result":{"unixtime":1,"rfc1123":"x"}}'
        with pytest.raises(KrakenExchangeError):
            decode(body, ServerTime)


class TestTypedResults:
    """Results bind directly to the requested type."""

    def test_binds_model(self) -> None:
        body = b'{"error":[],"result":{"unixtime":1700000000,"rfc1123":"Tue, 14 Nov 23 22:13:20 +0000"}}'
        result = decode(body, ServerTime)
        assert isinstance(result, ServerTime)
        assert result.unixtime == 1700000000

    def test_binds_generic_mapping(self) -> None:
        body = (
            b'{"error":[],"result":{"XXBT":{"aclass":"currency","altname":"XBT",'
            b'"decimals":10,"display_decimals":5}}}'
        )
        result = decode(body, dict[str, AssetInfo])
        assert result["XXBT"].altname == "XBT"
        assert result["XXBT"].decimals == 10

    def test_aliases_and_string_numbers(self) -> None:
        body = (
            b'{"error":[],"result":{"eb":"1101.3425","tb":"392.2264","m":"7.0354",'
            b'"n":"-10.0232","c":"21.1188","v":"31.1553","e":"382.2032","mf":"375.1678",'
            b'"ml":"5432.57"}}'
        )
        result = decode(body, TradeBalance)
        assert result.equivalent_balance == pytest.approx(1101.3425)
        assert result.unrealized_pnl == pytest.approx(-10.0232)
        assert result.margin_level == pytest.approx(5432.57)

    def test_untyped_result(self) -> None:
        body = b'{"error":[],"result":{"XXBTZEUR":[["1","2",3]],"last":"7"}}'
        result: Any = decode(body)
        assert result == {"XXBTZEUR": [["1", "2", 3]], "last": "7"}

    def test_boolean_result(self) -> None:
        assert decode(b'{"error":[],"result":true}', bool) is True

    def test_missing_error_key_treated_as_empty(self) -> None:
        assert decode(b'{"result":{"unixtime":1,"rfc1123":"x"}}', ServerTime).unixtime == 1

    def test_result_shape_mismatch(self) -> None:
        with pytest.raises(ResponseDecodeError):
            decode(b'{"error":[],"result":{"unixtime":"soon"}}', ServerTime)


class TestMalformedEnvelopes:
    """Bodies that are not Kraken envelopes are protocol errors."""

    def test_invalid_json(self) -> None:
        with pytest.raises(MalformedResponseError):
            decode(b'{"error": [', ServerTime)

    def test_invalid_json_untyped(self) -> None:
        with pytest.raises(MalformedResponseError):
            decode(b"<html>oops</html>")

    def test_top_level_array(self) -> None:
        with pytest.raises(MalformedResponseError):
            decode(b"[1, 2, 3]")

    def test_error_not_a_list(self) -> None:
        with pytest.raises(MalformedResponseError):
            decode(b'{"error":"boom","result":{}}')

    def test_neither_error_nor_result(self) -> None:
        with pytest.raises(MalformedResponseError):
            decode(b'{"error":[]}')


class TestIdempotentDecode:
    def test_same_bytes_decode_equal(self) -> None:
        body = b'{"error":[],"result":{"unixtime":1700000000,"rfc1123":"x"}}'
        assert decode(body, ServerTime) == decode(body, ServerTime)

    def test_untyped_same_bytes_decode_equal(self) -> None:
        body = b'{"error":[],"result":{"ZUSD":"100.5000"}}'
        assert decode(body) == decode(body)
