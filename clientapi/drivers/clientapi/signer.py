# -*- coding: utf-8 -*-
# clientapi/drivers/clientapi/signer.py
"""
Request signer for private commands.
- body = sorted key=value pairs joined with '&' (nonce and keyid merged in)
- sign = upper hex SHA-256 of body + secret; the secret never leaves the process
"""

import hashlib
import threading
import time
from typing import Mapping, NamedTuple

NONCE_FIELD = 'number'
KEYID_FIELD = 'keyid'
RESERVED_FIELDS = frozenset((NONCE_FIELD, KEYID_FIELD))


class Nonce(object):
    """
    Strictly increasing request counter, seeded from the current unix time.

    thread_safe=True (default) serializes next() with a lock. With
    thread_safe=False the caller must not share the client across threads.
    Values are not persisted; a restart within the same second may reuse
    a number and the server rejects it.
    """

    def __init__(self, start=None, thread_safe=True):
        self._value = int(time.time()) if start is None else int(start)
        self._lock = threading.Lock() if thread_safe else None

    def next(self) -> int:
        if self._lock is None:
            return self._advance()
        with self._lock:
            return self._advance()

    def _advance(self):
        value = self._value
        self._value += 1
        return value

    @property
    def upcoming(self) -> int:
        return self._value


def canonical_string(params: Mapping[str, str]) -> str:
    # plain code point order; the server reproduces it byte for byte
    return '&'.join(f"{key}={params[key]}" for key in sorted(params))


def compute_signature(canonical: str, secret: str) -> str:
    return hashlib.sha256((canonical + secret).encode('utf-8')).hexdigest().upper()


class SignedRequest(NamedTuple):
    command: str
    body: str
    signature: str
    nonce: int


class Signer(object):
    def __init__(self, keyid, secret):
        if not keyid or not secret:
            raise ValueError("Signer needs both keyid and secret")
        self.keyid = keyid
        self._secret = secret

    def __repr__(self):
        return f"Signer(keyid={self.keyid!r})"

    def sign(self, command, params: Mapping[str, str], nonce: int) -> SignedRequest:
        clash = RESERVED_FIELDS.intersection(params)
        if clash:
            raise ValueError(f"{command}: parameter name(s) {sorted(clash)} are reserved for signing")
        merged = dict(params)
        merged[NONCE_FIELD] = str(nonce)
        merged[KEYID_FIELD] = self.keyid
        body = canonical_string(merged)
        return SignedRequest(command, body, compute_signature(body, self._secret), nonce)
