"""
Client library for the exchange HTTP API.

    from clientapi import ClientApiDriver, OrderType
    api = ClientApiDriver('https://exchange.example.com/api', keyid='...', secret='...')
    api.add_order('BTC_USD', Decimal('100.5'), 2, OrderType.Buy)
"""

from clientapi.drivers.clientapi import (  # noqa: F401
    Account, Balance, Candle, ClientApiDriver, ClientApiError, CodecError,
    Depth, DepthLevel, MalformedNumber, MalformedResponse, MissingCredentials,
    MyTrade, Order, OrderStatus, OrderType, Symbol, Trade, TransportError,
    UnknownEnumValue, init_ClientApi,
)

__version__ = "1.0.0"
