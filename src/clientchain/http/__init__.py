# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubClient
from .client import Client, ClientFunc, client_func, create_default_http_client
from .decorators import (
    chain,
    check_body,
    check_header_error,
    check_status,
    decode_json,
    with_context,
    with_header,
    with_json_body,
    with_logging,
)
from .headers import Headers, canonical_header_key, header_value
from .httpx_client import HttpxClient
from .models import HttpRequest, HttpResponse
from .request import build_request, do_request, do_request_with_context

__all__ = [
    "Client",
    "ClientFunc",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "StubClient",
    "build_request",
    "canonical_header_key",
    "chain",
    "check_body",
    "check_header_error",
    "check_status",
    "client_func",
    "create_default_http_client",
    "decode_json",
    "do_request",
    "do_request_with_context",
    "header_value",
    "with_context",
    "with_header",
    "with_json_body",
    "with_logging",
]
