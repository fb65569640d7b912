# -*- coding: utf-8 -*-
# clientapi/drivers/clientapi/models.py
# Enumerations and immutable records returned by the exchange API.

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import NamedTuple, Optional, Tuple


class OrderType(Enum):
    """Trade / order direction. Sent on the wire by name."""
    Buy = 1
    Sell = -1


class OrderStatus(Enum):
    """
    Order lifecycle state. The codec uses the name; the integer codes are
    kept for consumers that serialize the status numerically.
    Negative codes are server-side rejections.
    """
    Unknown = 0
    Active = 1
    Done = 2
    Canceled = 3
    CrossDealReject = -1
    NoMoneyReject = -2
    PaceReject = -3
    NotFoundReject = -4
    InvalidPriceReject = -5

    @property
    def code(self):
        return self.value

    @property
    def is_reject(self):
        return self.value < 0

    @classmethod
    def from_code(cls, code):
        return cls(int(code))


class Symbol(NamedTuple):
    name: str
    currency: str
    price_step: Decimal


class Trade(NamedTuple):
    id: int
    ticker: str
    time: datetime
    order_type: OrderType
    price: Decimal
    volume: Decimal


class MyTrade(NamedTuple):
    """Own trade: the public trade plus the order that produced it."""
    trade: Trade
    order_id: int


class Candle(NamedTuple):
    symbol: str
    time: datetime
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal


class DepthLevel(NamedTuple):
    price: Decimal
    volume: Decimal
    order_type: OrderType


class Depth(NamedTuple):
    symbol: str
    bids: Tuple[DepthLevel, ...] = ()
    asks: Tuple[DepthLevel, ...] = ()


class Account(NamedTuple):
    currency: str
    amount: Decimal
    reserved: Decimal


class Balance(NamedTuple):
    accounts: Tuple[Account, ...] = ()

    def account(self, currency) -> Optional[Account]:
        """Return the account for ``currency`` or None."""
        for acc in self.accounts:
            if acc.currency == currency:
                return acc
        return None


class Order(NamedTuple):
    id: int
    symbol: str
    add_time: datetime
    modified_time: datetime
    price: Decimal
    volume: Decimal
    initial_volume: Decimal
    direction: OrderType
    status: OrderStatus
    comment: Optional[str] = None

    @property
    def is_active(self):
        return self.status is OrderStatus.Active
