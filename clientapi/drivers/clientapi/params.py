# -*- coding: utf-8 -*-
# clientapi/drivers/clientapi/params.py
# Declared request parameters for every command and the flattening rule.

from typing import Dict, NamedTuple, Tuple

from .codec import DECIMAL, INTEGER, ORDER_TYPE, STRING, Transform, format_param


class Param(NamedTuple):
    name: str
    transform: Transform
    required: bool = True


class ParamSpec(NamedTuple):
    command: str
    fields: Tuple[Param, ...] = ()
    signed: bool = False

    @property
    def names(self):
        return tuple(p.name for p in self.fields)


def flatten(spec: ParamSpec, **values) -> Dict[str, str]:
    """
    Build the parameter set for ``spec``: each declared field is converted
    with its transform; fields that are None or format to '' are left out
    entirely so optional parameters never reach the wire as empty tokens.
    A required field left as None raises TypeError before anything is signed.

    flatten(MY_TRADES, count=10, symbol=None) -> {'count': '10'}
    """
    unknown = set(values) - set(spec.names)
    if unknown:
        raise TypeError(f"{spec.command}: unexpected parameter(s) {sorted(unknown)}")
    params = {}
    for param in spec.fields:
        value = values.get(param.name)
        if value is None:
            if param.required:
                raise TypeError(f"{spec.command}: missing required parameter '{param.name}'")
            continue
        text = format_param(param.transform, value)
        if text == '':
            continue
        params[param.name] = text
    return params


# ---- public (GET) ----
SYMBOLS = ParamSpec('symbols')
TRADES = ParamSpec('trades', (Param('symbol', STRING), Param('count', INTEGER)))
CANDLES = ParamSpec('candles', (Param('symbol', STRING), Param('timeframe', INTEGER), Param('count', INTEGER)))
DEPTH = ParamSpec('depth', (Param('symbol', STRING), Param('depth', INTEGER)))

# ---- private (signed POST) ----
BALANCE = ParamSpec('balance', signed=True)
GET_ORDER = ParamSpec('getorder', (Param('id', INTEGER),), signed=True)
MY_ORDERS = ParamSpec('myorders', (Param('symbol', STRING),), signed=True)
MY_TRADES = ParamSpec('mytrades', (Param('count', INTEGER), Param('symbol', STRING, required=False)), signed=True)
ADD_ORDER = ParamSpec('addorder', (
    Param('symbol', STRING),
    Param('price', DECIMAL),
    Param('volume', DECIMAL),
    Param('direction', ORDER_TYPE),
    Param('comment', STRING, required=False),
), signed=True)
CANCEL_ORDER = ParamSpec('cancelorder', (Param('id', INTEGER),), signed=True)

ALL_SPECS = (SYMBOLS, TRADES, CANDLES, DEPTH,
             BALANCE, GET_ORDER, MY_ORDERS, MY_TRADES, ADD_ORDER, CANCEL_ORDER)
