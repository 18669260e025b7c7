# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers.

Transport failures are whatever the innermost client raises and are never
wrapped. Everything below is raised by the construction helpers, the
decorators or the context, so callers can tell "the request never went out"
and "the server answered but the answer was wrong" apart from a hard
transport failure. Errors produced after a response exists carry it on
``.response`` so it can still be inspected (and must still be closed).
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .http.models import HttpResponse


class ClientChainError(Exception):
    """Base class for errors raised by clientchain itself."""


class RequestConstructionError(ClientChainError, ValueError):
    """Method, URL, context or body could not be turned into a request."""


class EncodeError(ClientChainError):
    """A request body value could not be serialized."""


class ResponseError(ClientChainError):
    """An error paired with the response that triggered it."""

    def __init__(self, message: str, response: Optional[HttpResponse] = None):
        super().__init__(message)
        self.response = response


class ValidationError(ResponseError):
    """The transport succeeded but the response failed a check."""


class UnexpectedStatusError(ValidationError):
    def __init__(self, expected: int, actual: int, response: Optional[HttpResponse] = None):
        super().__init__(f"invalid status code: expected {expected}, got {actual}", response)
        self.expected = expected
        self.actual = actual


class MissingBodyError(ValidationError):
    def __init__(self, response: Optional[HttpResponse] = None):
        super().__init__("missing body in response", response)


class HeaderError(ValidationError):
    def __init__(self, header: str, value: str, response: Optional[HttpResponse] = None):
        super().__init__(f"received errors in header {header}: {value!r}", response)
        self.header = header
        self.value = value


class DecodeError(ResponseError):
    """The response body could not be decoded into the destination."""


class ContextError(ClientChainError):
    """The request context is done."""


class Cancelled(ContextError):
    def __init__(self, message: str = "context canceled"):
        super().__init__(message)


class DeadlineExceeded(ContextError, TimeoutError):
    def __init__(self, message: str = "context deadline exceeded"):
        super().__init__(message)


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    CANCELLED = "CANCELLED"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    CONSTRUCTION_ERROR = "CONSTRUCTION_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    ENCODE_ERROR = "ENCODE_ERROR"
    DECODE_ERROR = "DECODE_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


def categorize_exception(exc: Optional[BaseException]) -> ErrorCategory:
    """
    Map clientchain, httpx and socket-level exceptions to ErrorCategory.
    """
    import socket
    import ssl as ssl_module

    import httpx

    if exc is None:
        return ErrorCategory.NONE

    if isinstance(exc, DeadlineExceeded):
        return ErrorCategory.TIMEOUT
    if isinstance(exc, Cancelled):
        return ErrorCategory.CANCELLED
    if isinstance(exc, RequestConstructionError):
        return ErrorCategory.CONSTRUCTION_ERROR
    if isinstance(exc, ValidationError):
        return ErrorCategory.VALIDATION_ERROR
    if isinstance(exc, EncodeError):
        return ErrorCategory.ENCODE_ERROR
    if isinstance(exc, DecodeError):
        return ErrorCategory.DECODE_ERROR

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, TimeoutError):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


__all__ = [
    "Cancelled",
    "ClientChainError",
    "ContextError",
    "DeadlineExceeded",
    "DecodeError",
    "EncodeError",
    "ErrorCategory",
    "HeaderError",
    "MissingBodyError",
    "RequestConstructionError",
    "ResponseError",
    "UnexpectedStatusError",
    "ValidationError",
    "categorize_exception",
]
