# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
clientchain package entrypoint.

A one-method client capability (`submit(request) -> response`) plus a set of
decorators that each wrap a client and add one cross-cutting behavior:
context substitution, JSON request bodies, header injection, response
validation and JSON decoding. Any transport satisfying the capability can
sit at the bottom of the chain; an httpx-backed one is provided.
"""

from .config import ClientSettings, load_client_settings
from .context import Context, background, with_cancel, with_deadline, with_timeout
from .errors import (
    Cancelled,
    ClientChainError,
    ContextError,
    DeadlineExceeded,
    DecodeError,
    EncodeError,
    ErrorCategory,
    HeaderError,
    MissingBodyError,
    RequestConstructionError,
    UnexpectedStatusError,
    ValidationError,
)
from .http import (
    Client,
    ClientFunc,
    Headers,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    chain,
    check_body,
    check_header_error,
    check_status,
    client_func,
    create_default_http_client,
    decode_json,
    do_request,
    do_request_with_context,
    with_context,
    with_header,
    with_json_body,
    with_logging,
)
from .log import setup_logging
from .version import __version__

__all__ = [
    "Cancelled",
    "Client",
    "ClientChainError",
    "ClientFunc",
    "ClientSettings",
    "Context",
    "ContextError",
    "DeadlineExceeded",
    "DecodeError",
    "EncodeError",
    "ErrorCategory",
    "HeaderError",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "MissingBodyError",
    "RequestConstructionError",
    "UnexpectedStatusError",
    "ValidationError",
    "background",
    "chain",
    "check_body",
    "check_header_error",
    "check_status",
    "client_func",
    "create_default_http_client",
    "decode_json",
    "do_request",
    "do_request_with_context",
    "load_client_settings",
    "setup_logging",
    "with_cancel",
    "with_context",
    "with_deadline",
    "with_header",
    "with_json_body",
    "with_logging",
    "with_timeout",
    "__version__",
]
