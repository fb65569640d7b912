# -*- coding: utf-8 -*-
# clientapi/drivers/clientapi/codec.py
# Wire <-> native conversion: decimal strings, unix seconds, enum names,
# and the record tables used to decode JSON responses.

import json
import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from functools import partial
from typing import Any, Callable, Dict, List, NamedTuple, Sequence

import pandas as pd

from .errors import MalformedNumber, MalformedResponse, UnknownEnumValue
from .models import (
    Account, Balance, Candle, Depth, DepthLevel, MyTrade, Order, OrderStatus,
    OrderType, Symbol, Trade,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
DECIMAL_PLACES = 8
_QUANTUM = Decimal(1).scaleb(-DECIMAL_PLACES)
_DECIMAL_RE = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')
_INTEGER_RE = re.compile(r'^[+-]?\d+$')


# ---------------- decimals ----------------
def _as_decimal(value):
    if isinstance(value, bool):
        raise MalformedNumber(f"not a decimal: {value!r}")
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        # repr() is the shortest round-tripping literal, so 100.5 stays 100.5
        number = Decimal(repr(value))
    elif isinstance(value, str):
        token = value.strip()
        if not _DECIMAL_RE.match(token):
            raise MalformedNumber(f"not a decimal literal: {value!r}")
        number = Decimal(token)
    else:
        raise MalformedNumber(f"not a decimal: {value!r}")
    if not number.is_finite():
        raise MalformedNumber(f"not a finite decimal: {value!r}")
    return number


def encode_decimal(value) -> str:
    """
    Format with at most 8 fractional digits, trailing zeros dropped,
    '.' separator and never in exponent notation.
    encode_decimal(Decimal('0.00000001')) -> '0.00000001'
    encode_decimal(Decimal('2.50'))       -> '2.5'
    """
    number = _as_decimal(value)
    with localcontext() as ctx:
        ctx.prec = 64
        try:
            number = number.quantize(_QUANTUM, rounding=ROUND_HALF_UP)
        except InvalidOperation as e:
            raise MalformedNumber(f"decimal out of range: {value!r}") from e
    text = format(number, 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text in ('-0', ''):
        text = '0'
    return text


def decode_decimal(token) -> Decimal:
    return _as_decimal(token)


# ---------------- integers ----------------
def encode_integer(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedNumber(f"not an integer: {value!r}")
    return value


def decode_integer(token) -> int:
    if isinstance(token, bool):
        raise MalformedNumber(f"not an integer: {token!r}")
    if isinstance(token, int):
        return token
    if isinstance(token, Decimal):
        if token.is_finite() and token == token.to_integral_value():
            return int(token)
    elif isinstance(token, str) and _INTEGER_RE.match(token.strip()):
        return int(token.strip())
    raise MalformedNumber(f"not an integer: {token!r}")


# ---------------- timestamps ----------------
def encode_timestamp(value) -> int:
    """Whole seconds since the unix epoch; sub-second part is truncated toward zero.
    Naive datetimes are taken as UTC."""
    if not isinstance(value, datetime):
        raise TypeError(f"expected datetime, got {type(value).__name__}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    delta = value - EPOCH
    seconds = delta.days * 86400 + delta.seconds
    if seconds < 0 and delta.microseconds:
        seconds += 1
    return seconds


def decode_timestamp(token) -> datetime:
    seconds = decode_integer(token)
    try:
        return EPOCH + timedelta(seconds=seconds)
    except (OverflowError, ValueError) as e:
        raise MalformedNumber(f"timestamp out of range: {token!r}") from e


# ---------------- enums ----------------
def encode_enum(enum_cls, value) -> str:
    if not isinstance(value, enum_cls):
        value = decode_enum(enum_cls, value)
    return value.name


def decode_enum(enum_cls, token):
    """Accepts the declared name (case-sensitive) or the integer code."""
    if isinstance(token, enum_cls):
        return token
    if isinstance(token, str):
        member = enum_cls.__members__.get(token)
        if member is not None:
            return member
    elif isinstance(token, int) and not isinstance(token, bool):
        try:
            return enum_cls(token)
        except ValueError:
            pass
    raise UnknownEnumValue(enum_cls, token)


# ---------------- strings ----------------
def encode_string(value) -> str:
    return value if isinstance(value, str) else str(value)


def decode_string(token) -> str:
    if not isinstance(token, str):
        raise MalformedResponse(f"expected string, got {token!r}")
    return token


class Transform(NamedTuple):
    """A bidirectional value conversion: native -> wire token and back."""
    encode: Callable[[Any], Any]
    decode: Callable[[Any], Any]


STRING = Transform(encode_string, decode_string)
INTEGER = Transform(encode_integer, decode_integer)
DECIMAL = Transform(encode_decimal, decode_decimal)
TIMESTAMP = Transform(encode_timestamp, decode_timestamp)


def enum_transform(enum_cls) -> Transform:
    return Transform(partial(encode_enum, enum_cls), partial(decode_enum, enum_cls))


ORDER_TYPE = enum_transform(OrderType)
ORDER_STATUS = enum_transform(OrderStatus)


def format_param(transform, value) -> str:
    """String form of a parameter value, as placed in a query string or signed body."""
    token = transform.encode(value)
    return token if isinstance(token, str) else str(token)


# ---------------- JSON / records ----------------
def parse_json(text):
    """Parse a response body. Floats become Decimal, never binary floats."""
    try:
        return json.loads(text, parse_float=Decimal)
    except ValueError as e:
        raise MalformedResponse(f"response is not valid JSON: {e}") from e


class RecordField(NamedTuple):
    wire: str
    attr: str
    transform: Transform
    optional: bool = False


class RecordSpec(object):
    """Explicit field table for one record type, used for decode and encode."""

    def __init__(self, record_cls, fields: Sequence[RecordField]):
        self.record_cls = record_cls
        self.fields = tuple(fields)

    def _decode_fields(self, obj) -> Dict[str, Any]:
        if not isinstance(obj, dict):
            raise MalformedResponse(f"{self.record_cls.__name__}: expected object, got {type(obj).__name__}")
        # server field names are matched case-insensitively
        lowered = {str(k).lower(): v for k, v in obj.items()}
        values = {}
        for field in self.fields:
            token = lowered.get(field.wire.lower())
            if token is None:
                if field.optional:
                    continue
                raise MalformedResponse(f"{self.record_cls.__name__}: missing field '{field.wire}'")
            values[field.attr] = field.transform.decode(token)
        return values

    def _encode_fields(self, record) -> Dict[str, Any]:
        out = {}
        for field in self.fields:
            value = getattr(record, field.attr)
            out[field.wire] = None if value is None else field.transform.encode(value)
        return out

    def decode(self, obj):
        return self.record_cls(**self._decode_fields(obj))

    def encode(self, record) -> Dict[str, Any]:
        return self._encode_fields(record)


class EmbeddedRecordSpec(RecordSpec):
    """Record holding another record whose fields sit flat beside its own on the wire."""

    def __init__(self, record_cls, attr, inner: RecordSpec, fields: Sequence[RecordField]):
        super().__init__(record_cls, fields)
        self.attr = attr
        self.inner = inner

    def decode(self, obj):
        values = self._decode_fields(obj)
        values[self.attr] = self.inner.decode(obj)
        return self.record_cls(**values)

    def encode(self, record) -> Dict[str, Any]:
        out = self.inner.encode(getattr(record, self.attr))
        out.update(self._encode_fields(record))
        return out


def list_of(spec: RecordSpec) -> Transform:
    def _decode(token):
        if not isinstance(token, list):
            raise MalformedResponse(f"expected list of {spec.record_cls.__name__}, got {type(token).__name__}")
        return tuple(spec.decode(item) for item in token)

    def _encode(items):
        return [spec.encode(item) for item in items]

    return Transform(_encode, _decode)


SYMBOL = RecordSpec(Symbol, [
    RecordField('Name', 'name', STRING),
    RecordField('Currency', 'currency', STRING),
    RecordField('PriceStep', 'price_step', DECIMAL),
])

TRADE = RecordSpec(Trade, [
    RecordField('Id', 'id', INTEGER),
    RecordField('Ticker', 'ticker', STRING),
    RecordField('Time', 'time', TIMESTAMP),
    RecordField('OrderType', 'order_type', ORDER_TYPE),
    RecordField('Price', 'price', DECIMAL),
    RecordField('Volume', 'volume', DECIMAL),
])

MY_TRADE = EmbeddedRecordSpec(MyTrade, 'trade', TRADE, [
    RecordField('OrderId', 'order_id', INTEGER),
])

CANDLE = RecordSpec(Candle, [
    RecordField('Symbol', 'symbol', STRING),
    RecordField('Time', 'time', TIMESTAMP),
    RecordField('Open', 'open', DECIMAL),
    RecordField('High', 'high', DECIMAL),
    RecordField('Low', 'low', DECIMAL),
    RecordField('Close', 'close', DECIMAL),
    RecordField('Volume', 'volume', DECIMAL),
])

DEPTH_LEVEL = RecordSpec(DepthLevel, [
    RecordField('Price', 'price', DECIMAL),
    RecordField('Volume', 'volume', DECIMAL),
    RecordField('OrderType', 'order_type', ORDER_TYPE),
])

DEPTH = RecordSpec(Depth, [
    RecordField('Symbol', 'symbol', STRING),
    RecordField('Bids', 'bids', list_of(DEPTH_LEVEL), optional=True),
    RecordField('Asks', 'asks', list_of(DEPTH_LEVEL), optional=True),
])

ACCOUNT = RecordSpec(Account, [
    RecordField('Currency', 'currency', STRING),
    RecordField('Amount', 'amount', DECIMAL),
    RecordField('Reserved', 'reserved', DECIMAL),
])

BALANCE = RecordSpec(Balance, [
    RecordField('Accounts', 'accounts', list_of(ACCOUNT), optional=True),
])

ORDER = RecordSpec(Order, [
    RecordField('Id', 'id', INTEGER),
    RecordField('Symbol', 'symbol', STRING),
    RecordField('AddTime', 'add_time', TIMESTAMP),
    RecordField('ModifiedTime', 'modified_time', TIMESTAMP),
    RecordField('Price', 'price', DECIMAL),
    RecordField('Volume', 'volume', DECIMAL),
    RecordField('InitialVolume', 'initial_volume', DECIMAL),
    RecordField('Direction', 'direction', ORDER_TYPE),
    RecordField('Status', 'status', ORDER_STATUS),
    RecordField('Comment', 'comment', STRING, optional=True),
])


def decode_record(spec: RecordSpec, payload):
    return spec.decode(payload)


def decode_list(spec: RecordSpec, payload) -> List[Any]:
    return list(list_of(spec).decode(payload))


def encode_record(spec: RecordSpec, record) -> Dict[str, Any]:
    return spec.encode(record)


CANDLE_COLUMNS = ['time', 'open', 'high', 'low', 'close', 'volume']


def candles_to_frame(candles) -> pd.DataFrame:
    """Candles as a time-sorted DataFrame. Prices stay Decimal (object dtype)."""
    if not candles:
        return pd.DataFrame(columns=CANDLE_COLUMNS)
    rows = [{col: getattr(c, col) for col in CANDLE_COLUMNS} for c in candles]
    df = pd.DataFrame(rows, columns=CANDLE_COLUMNS)
    return df.sort_values('time').reset_index(drop=True)
