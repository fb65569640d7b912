# -*- coding: utf-8 -*-
# clientapi/drivers/clientapi/rest.py
"""
REST transport for this exchange.
Responsibilities:
- GET public commands with a query string
- POST signed commands with the canonical body and `sign` header
- Map network failures / non-2xx statuses to TransportError and parse JSON
No retry, no rate limiting; every failure goes straight to the caller.
"""

import logging
import time

import requests

from .codec import parse_json
from .errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
SIGN_HEADER = 'sign'
FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


def normalize_base_url(address):
    """Trailing slashes collapse to exactly one."""
    if not address or not str(address).strip():
        raise ValueError("base_url is required")
    return str(address).strip().rstrip('/') + '/'


class RestClient:
    def __init__(self, base_url, timeout=DEFAULT_TIMEOUT, audit=None):
        self.base_url = normalize_base_url(base_url)
        self.timeout = timeout
        self.audit = audit

    def get(self, command, params=None):
        """Public call: GET <base>/<command>?k=v&... (declared order)."""
        return self._send('GET', command, params=dict(params or {}))

    def post(self, signed):
        """Private call: POST the signed canonical body."""
        headers = {
            'Content-Type': FORM_CONTENT_TYPE,
            SIGN_HEADER: signed.signature,
        }
        return self._send('POST', signed.command, nonce=signed.nonce,
                          data=signed.body.encode('utf-8'), headers=headers)

    def _send(self, method, command, nonce=None, **kwargs):
        url = self.base_url + command
        # only parameter names are logged; values and bodies may carry the key id
        logger.debug("%s %s params=%s", method, command, sorted(kwargs.get('params') or {}))
        t0 = time.time()
        try:
            response = requests.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            elapsed = int((time.time() - t0) * 1000)
            logger.warning("%s %s failed after %dms: %s", method, command, elapsed, e)
            self._audit(method, command, None, elapsed, nonce)
            raise TransportError(f"{method} {command} failed: {e}") from e

        elapsed = int((time.time() - t0) * 1000)
        status = response.status_code
        logger.debug("%s %s -> %s (%dms)", method, command, status, elapsed)
        self._audit(method, command, status, elapsed, nonce)
        if not 200 <= status < 300:
            raise TransportError(f"{method} {command} returned HTTP {status}",
                                 status_code=status, body=response.text)
        return parse_json(response.text)

    def _audit(self, method, command, status, elapsed, nonce):
        if self.audit is not None:
            self.audit.log_request(method, command, status, elapsed, nonce)
