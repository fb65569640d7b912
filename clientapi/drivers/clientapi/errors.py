# -*- coding: utf-8 -*-
# clientapi/drivers/clientapi/errors.py
# Exceptions raised by the client. Nothing here is retried or recovered.

import re

_SIGN_WORD = re.compile(r"\bsign(ature)?\b")


class ClientApiError(Exception):
    """Base class for every failure surfaced by the client."""


class TransportError(ClientApiError):
    """Connection failure or a non-2xx HTTP status."""

    def __init__(self, message, status_code=None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def is_auth_rejected(self):
        """True when the server refused the signature or the key."""
        if self.status_code in (401, 403):
            return True
        text = (self.body or "").lower()
        return self.status_code is not None and _SIGN_WORD.search(text) is not None


class MissingCredentials(ClientApiError):
    """A private call was issued by a client built without keyid/secret."""


class CodecError(ClientApiError, ValueError):
    """Base for wire <-> native conversion failures."""


class MalformedResponse(CodecError):
    """Response body is not JSON or does not match the expected shape."""


class MalformedNumber(CodecError):
    """Token is not a valid decimal / integer literal."""


class UnknownEnumValue(CodecError):
    """Wire token matches no declared enumerant."""

    def __init__(self, enum_cls, token):
        super().__init__(f"{token!r} is not a valid {enum_cls.__name__}")
        self.enum_cls = enum_cls
        self.token = token
