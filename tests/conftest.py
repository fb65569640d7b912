# -*- coding: utf-8 -*-
# tests/conftest.py

import json
import sys
from pathlib import Path

# Ensure project root (which contains `clientapi/` and `configs/`) is on sys.path
_THIS_FILE = Path(__file__).resolve()
_PROJECT_ROOT = _THIS_FILE.parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

import pytest

from clientapi.drivers.clientapi.driver import ClientApiDriver

BASE_URL = "https://exchange.test/api/"
KEYID = "KEY"
SECRET = "s3cret"
NONCE_START = 1700000000


class FakeResponse:
    def __init__(self, status_code=200, text="null"):
        self.status_code = status_code
        self.text = text


class FakeHttp:
    """Stands in for requests.request; replays queued responses in order."""

    def __init__(self):
        self.calls = []
        self._responses = []

    def queue(self, payload=None, status=200, text=None):
        if text is None:
            text = json.dumps(payload)
        self._responses.append(FakeResponse(status, text))

    def fail(self, exc):
        self._responses.append(exc)

    def __call__(self, method, url, **kwargs):
        self.calls.append(dict(method=method, url=url, **kwargs))
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def http(monkeypatch):
    fake = FakeHttp()
    monkeypatch.setattr("clientapi.drivers.clientapi.rest.requests.request", fake)
    return fake


@pytest.fixture
def client():
    return ClientApiDriver(BASE_URL, keyid=KEYID, secret=SECRET, nonce_start=NONCE_START)


@pytest.fixture
def public_client():
    return ClientApiDriver(BASE_URL)


@pytest.fixture
def order_payload():
    return {
        "Id": 42,
        "Symbol": "BTC_USD",
        "AddTime": 1700000000,
        "ModifiedTime": 1700000005,
        "Price": "100.5",
        "Volume": "2",
        "InitialVolume": "2",
        "Direction": "Buy",
        "Status": "Active",
        "Comment": None,
    }
