# -*- coding: utf-8 -*-
# clientapi/drivers/clientapi/driver.py
# Typed operations over the exchange HTTP API: params -> (signer) -> rest -> codec.

import logging

from clientapi.core.kernel.syscalls import ExchangeSyscalls
from clientapi.utils.logger import RequestLogger
from configs.account_reader import AccountReader
from configs.config_reader import ConfigReader

from . import codec, params
from .errors import MissingCredentials
from .rest import DEFAULT_TIMEOUT, RestClient
from .signer import Nonce, Signer

logger = logging.getLogger(__name__)

EXCHANGE = 'clientapi'


def get_account_name_by_id(account_id=0, reader=None, exchange=EXCHANGE):
    """
    根据账户ID获取账户名称

    Args:
        account_id: 账户ID (0=第一个账户, 1=第二个账户, ...)
        reader: AccountReader 实例
        exchange: 交易所名称

    Returns:
        str: 账户名称
    """
    reader = reader or AccountReader()
    accounts = reader.list_accounts(exchange)
    if not accounts:
        raise LookupError(f"no {exchange} accounts configured in {reader.account_file}")
    if account_id < len(accounts):
        return accounts[account_id]
    logger.warning("account id %s out of range, available: %s; using %s",
                   account_id, accounts, accounts[0])
    return accounts[0]


def init_ClientApi(account_id=None, config_dir=None, **overrides):
    """
    初始化 ClientApi 客户端

    Args:
        account_id: 账户ID, 按 configs/account.yaml 中 accounts.clientapi 下的顺序映射;
                    None 表示只用公共接口 (无签名)
        config_dir: 配置目录, 默认为 configs/
        **overrides: 覆盖 clientapi.yaml 中的 base_url / timeout / log_dir / thread_safe

    Returns:
        ClientApiDriver
    """
    settings = ConfigReader(config_dir).get_clientapi_config()
    settings.update({k: v for k, v in overrides.items() if v is not None})

    keyid = secret = None
    if account_id is not None:
        accounts = AccountReader(config_dir)
        account_name = get_account_name_by_id(account_id, accounts)
        credentials = accounts.get_clientapi_credentials(account_name)
        keyid, secret = credentials['keyid'] or None, credentials['secret'] or None
        logger.info("using %s account '%s' (id %s)", EXCHANGE, account_name, account_id)

    audit = RequestLogger(settings['log_dir']) if settings.get('log_dir') else None
    return ClientApiDriver(
        settings['base_url'],
        keyid=keyid,
        secret=secret,
        timeout=settings.get('timeout', DEFAULT_TIMEOUT),
        thread_safe=settings.get('thread_safe', True),
        audit=audit,
    )


class ClientApiDriver(ExchangeSyscalls):
    """
    Exchange client. Public calls are plain GETs; private calls are signed
    POSTs and need keyid + secret.

    One instance owns one nonce counter. With thread_safe=True (default) the
    counter is locked and the instance may be shared between threads; with
    thread_safe=False the caller guarantees single-threaded use.
    """

    def __init__(self, base_url, keyid=None, secret=None, timeout=DEFAULT_TIMEOUT,
                 thread_safe=True, audit=None, nonce_start=None):
        self.cex = 'ClientApi'
        self.rest = RestClient(base_url, timeout=timeout, audit=audit)
        self.signer = Signer(keyid, secret) if keyid and secret else None
        self.nonce = Nonce(start=nonce_start, thread_safe=thread_safe)

    def __repr__(self):
        return f"ClientApiDriver({self.rest.base_url!r}, signed={self.signer is not None})"

    # -------------- helpers --------------
    def _public(self, spec, **values):
        return self.rest.get(spec.command, params.flatten(spec, **values))

    def _private(self, spec, **values):
        if self.signer is None:
            raise MissingCredentials(f"'{spec.command}' needs keyid and secret")
        request_params = params.flatten(spec, **values)
        signed = self.signer.sign(spec.command, request_params, self.nonce.next())
        return self.rest.post(signed)

    # -------------- public --------------
    def symbols(self):
        return codec.decode_list(codec.SYMBOL, self._public(params.SYMBOLS))

    def trades(self, symbol, count=1000):
        return codec.decode_list(codec.TRADE, self._public(params.TRADES, symbol=symbol, count=count))

    def candles(self, symbol, timeframe=60, count=1000):
        payload = self._public(params.CANDLES, symbol=symbol, timeframe=timeframe, count=count)
        return codec.decode_list(codec.CANDLE, payload)

    def candles_frame(self, symbol, timeframe=60, count=1000):
        """Same as candles() but as a DataFrame (time, open, high, low, close, volume)."""
        return codec.candles_to_frame(self.candles(symbol, timeframe=timeframe, count=count))

    def depth(self, symbol, depth=5):
        return codec.decode_record(codec.DEPTH, self._public(params.DEPTH, symbol=symbol, depth=depth))

    # -------------- private --------------
    def balance(self):
        return codec.decode_record(codec.BALANCE, self._private(params.BALANCE))

    def get_order(self, id):
        return codec.decode_record(codec.ORDER, self._private(params.GET_ORDER, id=id))

    def active_orders(self, symbol):
        return codec.decode_list(codec.ORDER, self._private(params.MY_ORDERS, symbol=symbol))

    def my_trades(self, count, symbol=None):
        return codec.decode_list(codec.MY_TRADE, self._private(params.MY_TRADES, count=count, symbol=symbol))

    def add_order(self, symbol, price, volume, direction, comment=None):
        payload = self._private(params.ADD_ORDER, symbol=symbol, price=price, volume=volume,
                                direction=direction, comment=comment)
        order = codec.decode_record(codec.ORDER, payload)
        if order.status.is_reject:
            logger.info("addorder %s rejected: %s", symbol, order.status.name)
        return order

    def cancel_order(self, id):
        return codec.decode_record(codec.ORDER, self._private(params.CANCEL_ORDER, id=id))
