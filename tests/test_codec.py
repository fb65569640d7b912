# -*- coding: utf-8 -*-
# tests/test_codec.py
# decimal / timestamp / enum transforms and record tables

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pandas as pd
import pytest

from clientapi.drivers.clientapi import codec
from clientapi.drivers.clientapi.codec import (
    EPOCH, TIMESTAMP, decode_decimal, decode_enum, decode_integer, decode_timestamp,
    encode_decimal, encode_enum, encode_timestamp, format_param, parse_json,
)
from clientapi.drivers.clientapi.errors import MalformedNumber, MalformedResponse, UnknownEnumValue
from clientapi.drivers.clientapi.models import MyTrade, OrderStatus, OrderType, Trade


# ---------------- decimals ----------------
def test_smallest_step_round_trips():
    assert encode_decimal(Decimal("0.00000001")) == "0.00000001"
    assert decode_decimal("0.00000001") == Decimal("0.00000001")


@pytest.mark.parametrize("text", ["0", "1", "100.5", "-3.14159265", "12345678901234.12345678", "0.1"])
def test_decimal_round_trip_has_no_drift(text):
    value = Decimal(text)
    assert decode_decimal(encode_decimal(value)) == value


@pytest.mark.parametrize("value, expected", [
    (Decimal("2.50"), "2.5"),
    (Decimal("100"), "100"),
    (Decimal("1E+2"), "100"),
    (Decimal("1E-8"), "0.00000001"),
    (Decimal("0.123456789"), "0.12345679"),
    (Decimal("-0.000000001"), "0"),
    (2, "2"),
    (100.5, "100.5"),
    ("7.000", "7"),
])
def test_encode_decimal_format(value, expected):
    assert encode_decimal(value) == expected


@pytest.mark.parametrize("token", ["abc", "1,5", "", "NaN", "Infinity", True, None, [1]])
def test_decode_decimal_rejects_non_literals(token):
    with pytest.raises(MalformedNumber):
        decode_decimal(token)


def test_json_numbers_never_become_floats():
    payload = parse_json('{"p": 0.1, "q": 3}')
    assert payload["p"] == Decimal("0.1")
    assert isinstance(payload["p"], Decimal)
    assert payload["q"] == 3


def test_parse_json_rejects_garbage():
    with pytest.raises(MalformedResponse):
        parse_json("<html>oops</html>")


# ---------------- integers / timestamps ----------------
def test_timestamp_encodes_unix_seconds():
    moment = EPOCH + timedelta(seconds=1700000000)
    assert encode_timestamp(moment) == 1700000000
    assert format_param(TIMESTAMP, moment) == "1700000000"
    assert decode_timestamp(1700000000) == moment
    assert decode_timestamp("1700000000") == moment


def test_timestamp_truncates_sub_seconds():
    assert encode_timestamp(EPOCH + timedelta(seconds=1700000000, milliseconds=999)) == 1700000000
    assert encode_timestamp(EPOCH - timedelta(milliseconds=500)) == 0
    assert encode_timestamp(EPOCH - timedelta(seconds=1, milliseconds=500)) == -1


def test_naive_datetime_is_utc():
    assert encode_timestamp(datetime(1970, 1, 2)) == 86400
    other_zone = datetime(1970, 1, 2, 3, tzinfo=timezone(timedelta(hours=3)))
    assert encode_timestamp(other_zone) == 86400


def test_decoded_timestamp_is_aware_utc():
    assert decode_timestamp(0).tzinfo is timezone.utc


def test_timestamp_out_of_range_is_malformed():
    with pytest.raises(MalformedNumber):
        decode_timestamp(10 ** 15)


@pytest.mark.parametrize("token", ["1.5", "x", True, Decimal("1.5")])
def test_decode_integer_rejects(token):
    with pytest.raises(MalformedNumber):
        decode_integer(token)


def test_decode_integer_accepts_integral_decimal():
    assert decode_integer(Decimal("12")) == 12


# ---------------- enums ----------------
def test_enum_uses_names_on_the_wire():
    assert encode_enum(OrderType, OrderType.Buy) == "Buy"
    assert encode_enum(OrderStatus, OrderStatus.CrossDealReject) == "CrossDealReject"
    assert decode_enum(OrderStatus, "Done") is OrderStatus.Done


def test_enum_accepts_numeric_codes():
    assert decode_enum(OrderStatus, -5) is OrderStatus.InvalidPriceReject
    assert decode_enum(OrderType, -1) is OrderType.Sell


def test_status_code_table():
    codes = {s.name: s.code for s in OrderStatus}
    assert codes == {
        "Unknown": 0, "Active": 1, "Done": 2, "Canceled": 3,
        "CrossDealReject": -1, "NoMoneyReject": -2, "PaceReject": -3,
        "NotFoundReject": -4, "InvalidPriceReject": -5,
    }
    assert OrderStatus.from_code(-3) is OrderStatus.PaceReject
    assert OrderStatus.NoMoneyReject.is_reject
    assert not OrderStatus.Active.is_reject


@pytest.mark.parametrize("token", ["Bogus", "done", 7, True])
def test_unknown_enum_token_fails(token):
    with pytest.raises(UnknownEnumValue):
        decode_enum(OrderStatus, token)


# ---------------- records ----------------
def test_order_record_decode(order_payload):
    order = codec.decode_record(codec.ORDER, order_payload)
    assert order.id == 42
    assert order.price == Decimal("100.5")
    assert order.direction is OrderType.Buy
    assert order.status is OrderStatus.Active
    assert order.add_time == EPOCH + timedelta(seconds=1700000000)
    assert order.comment is None
    assert order.is_active


def test_record_keys_match_case_insensitively():
    symbol = codec.decode_record(codec.SYMBOL, {"name": "BTC_USD", "CURRENCY": "USD", "priceStep": "0.01"})
    assert symbol.name == "BTC_USD"
    assert symbol.price_step == Decimal("0.01")


def test_missing_required_field_is_malformed(order_payload):
    del order_payload["Status"]
    with pytest.raises(MalformedResponse):
        codec.decode_record(codec.ORDER, order_payload)


def test_unknown_status_in_record(order_payload):
    order_payload["Status"] = "Bogus"
    with pytest.raises(UnknownEnumValue):
        codec.decode_record(codec.ORDER, order_payload)


def test_millisecond_time_in_record(order_payload):
    order_payload["AddTime"] = 1700000000000
    with pytest.raises(MalformedNumber):
        codec.decode_record(codec.ORDER, order_payload)


def test_my_trade_embeds_trade():
    raw = {"Id": 7, "Ticker": "BTC_USD", "Time": 1700000000, "OrderType": "Sell",
           "Price": "99.9", "Volume": "0.5", "OrderId": 42}
    my = codec.decode_record(codec.MY_TRADE, raw)
    assert isinstance(my, MyTrade)
    assert isinstance(my.trade, Trade)
    assert my.order_id == 42
    assert my.trade.order_type is OrderType.Sell
    assert codec.encode_record(codec.MY_TRADE, my) == raw


def test_depth_levels_default_to_empty():
    depth = codec.decode_record(codec.DEPTH, {"Symbol": "BTC_USD", "Bids": [
        {"Price": "100", "Volume": "1.5", "OrderType": "Buy"}]})
    assert len(depth.bids) == 1
    assert depth.asks == ()
    assert depth.bids[0].volume == Decimal("1.5")


def test_balance_lookup():
    balance = codec.decode_record(codec.BALANCE, {"Accounts": [
        {"Currency": "USD", "Amount": "10.5", "Reserved": "1"},
        {"Currency": "BTC", "Amount": "0.00000001", "Reserved": "0"}]})
    assert balance.account("BTC").amount == Decimal("0.00000001")
    assert balance.account("EUR") is None
    assert codec.decode_record(codec.BALANCE, {}).accounts == ()


def test_order_encodes_to_wire_tokens(order_payload):
    order = codec.decode_record(codec.ORDER, order_payload)
    wire = codec.encode_record(codec.ORDER, order)
    assert wire["Price"] == "100.5"
    assert wire["AddTime"] == 1700000000
    assert wire["Direction"] == "Buy"
    assert wire["Status"] == "Active"
    assert wire["Comment"] is None


def test_list_payload_must_be_a_list():
    with pytest.raises(MalformedResponse):
        codec.decode_list(codec.SYMBOL, {"Name": "BTC"})


def test_candles_to_frame_sorted_and_lossless():
    rows = [
        {"Symbol": "BTC_USD", "Time": 120, "Open": "2", "High": "3", "Low": "1", "Close": "2.5", "Volume": "10"},
        {"Symbol": "BTC_USD", "Time": 60, "Open": "1", "High": "2", "Low": "0.5", "Close": "2", "Volume": "0.00000001"},
    ]
    df = codec.candles_to_frame(codec.decode_list(codec.CANDLE, rows))
    assert list(df.columns) == codec.CANDLE_COLUMNS
    assert df["time"].iloc[0] == pd.Timestamp(EPOCH + timedelta(seconds=60))
    assert df["volume"].iloc[0] == Decimal("0.00000001")
    assert codec.candles_to_frame([]).empty
