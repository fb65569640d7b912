# -*- coding: utf-8 -*-
# clientapi/core/kernel/syscalls.py
# The operation surface every exchange driver exposes.
# Plain base class with NotImplementedError.

class ExchangeSyscalls(object):
    # ---- Ref-data / market data (public) ----
    def symbols(self):
        """Return list[Symbol]"""
        raise NotImplementedError

    def trades(self, symbol, count=1000):
        """Return the latest public trades: list[Trade]"""
        raise NotImplementedError

    def candles(self, symbol, timeframe=60, count=1000):
        """Return list[Candle]
           :param symbol: Trading pair symbol
           :param timeframe: Candle length in seconds
           :param count: Number of candles to return
        """
        raise NotImplementedError

    def depth(self, symbol, depth=5):
        """Return Depth with `depth` price levels per side"""
        raise NotImplementedError

    # ---- Account (private) ----
    def balance(self):
        """Return Balance"""
        raise NotImplementedError

    def my_trades(self, count, symbol=None):
        """Return own fills: list[MyTrade]"""
        raise NotImplementedError

    # ---- Trading (private) ----
    def get_order(self, id):
        """Return Order"""
        raise NotImplementedError

    def active_orders(self, symbol):
        """Return open orders for symbol: list[Order]"""
        raise NotImplementedError

    def add_order(self, symbol, price, volume, direction, comment=None):
        """Place a limit order, return Order. Rejections arrive as Order.status.
           :param price: Decimal (or int/str/float literal) price
           :param volume: Decimal quantity
           :param direction: OrderType.Buy / OrderType.Sell
           :param comment: Optional free text, omitted when None
        """
        raise NotImplementedError

    def cancel_order(self, id):
        """Cancel a single order, return Order"""
        raise NotImplementedError
