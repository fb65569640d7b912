"""
ClientApi exchange driver package.
driver.py + rest.py + signer.py + codec.py according to clientapi syscalls.
"""

from .driver import ClientApiDriver, init_ClientApi  # noqa: F401
from .errors import (  # noqa: F401
    ClientApiError, CodecError, MalformedNumber, MalformedResponse,
    MissingCredentials, TransportError, UnknownEnumValue,
)
from .models import (  # noqa: F401
    Account, Balance, Candle, Depth, DepthLevel, MyTrade, Order, OrderStatus,
    OrderType, Symbol, Trade,
)
