# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Build a request and submit it through a client chain."""

from __future__ import annotations

import io
import re
import string
from typing import Any, Optional
from urllib.parse import urlsplit

from ..context import Context, background
from ..errors import RequestConstructionError
from .client import Client
from .headers import Headers
from .models import Body, HttpRequest, HttpResponse

_TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-.^_`|~")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_BAD_HOST_CHARS = re.compile(r'[\s<>"{}|\\^`]')


def _validate_method(method: Optional[str]) -> str:
    if not method:
        return "GET"
    if not isinstance(method, str) or any(ch not in _TOKEN_CHARS for ch in method):
        raise RequestConstructionError(f"invalid method {method!r}")
    return method


def _validate_url(url: Any) -> str:
    if not isinstance(url, str):
        raise RequestConstructionError(f"invalid URL {url!r}: expected str")
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        raise RequestConstructionError(f"invalid URL {url!r}: contains control characters")
    try:
        parts = urlsplit(url)
        # `.port` is parsed lazily and raises on out-of-range or non-numeric values.
        parts.port
    except ValueError as exc:
        raise RequestConstructionError(f"invalid URL {url!r}: {exc}") from exc
    if url.startswith(":") or (parts.netloc and not parts.scheme):
        raise RequestConstructionError(f"invalid URL {url!r}: missing protocol scheme")
    # The query is passed through verbatim; only host, path and fragment get unescaped.
    for component in (parts.netloc, parts.path, parts.fragment):
        if _BAD_ESCAPE.search(component):
            raise RequestConstructionError(f"invalid URL {url!r}: invalid URL escape")
    if parts.hostname and _BAD_HOST_CHARS.search(parts.hostname):
        raise RequestConstructionError(f"invalid URL {url!r}: invalid character in host name")
    return url


def _normalize_body(body: Any) -> Optional[Body]:
    if body is None:
        return None
    if isinstance(body, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(body))
    if isinstance(body, str):
        return io.BytesIO(body.encode("utf-8"))
    if callable(getattr(body, "read", None)):
        return body
    raise RequestConstructionError(f"unsupported body type {type(body).__name__}")


def build_request(ctx: Context, method: Optional[str], url: str, body: Any = None) -> HttpRequest:
    """Validate the inputs and build a request bound to `ctx`."""
    if ctx is None:
        raise RequestConstructionError("nil context")
    return HttpRequest(
        method=_validate_method(method),
        url=_validate_url(url),
        headers=Headers(),
        body=_normalize_body(body),
        context=ctx,
    )


def do_request_with_context(
    ctx: Context,
    client: Client,
    method: Optional[str],
    url: str,
    body: Any = None,
) -> HttpResponse:
    """
    Build a request bound to `ctx` and submit it through `client`.

    Raises RequestConstructionError before anything is submitted when the
    inputs are malformed. No retries, no response checks: the caller owns the
    returned response and must close it.
    """
    request = build_request(ctx, method, url, body)
    return client.submit(request)


def do_request(client: Client, method: Optional[str], url: str, body: Any = None) -> HttpResponse:
    """`do_request_with_context` with the background context."""
    return do_request_with_context(background(), client, method, url, body)


__all__ = ["build_request", "do_request", "do_request_with_context"]
