# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Composable client decorators.

Every function here takes an inner Client (plus its own parameters) and
returns a ClientFunc that is itself a Client, so layers stack freely:

    client = HttpxClient()
    client = check_status(client, 200)
    client = check_header_error(client)
    client = check_body(client)
    client = with_context(client, ctx)

The last layer applied is the outermost one: it sees the request first and
the response last. Each layer delegates exactly once and keeps no state
between calls. When the inner call raises, the exception propagates
unchanged and the layer's post-processing is skipped.
"""

from __future__ import annotations

import dataclasses
import io
import json
import logging
import time
from collections.abc import Callable
from typing import Any, Optional

from ..config import load_client_settings
from ..context import Context
from ..errors import (
    DecodeError,
    EncodeError,
    HeaderError,
    MissingBodyError,
    UnexpectedStatusError,
    categorize_exception,
)
from .client import Client, ClientFunc
from .headers import header_value
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

Layer = Callable[[Client], Client]


def chain(client: Client, *layers: Layer) -> Client:
    """
    Apply `layers` to `client` in order; the last layer ends up outermost.

    Layers are one-argument factories, e.g. `check_body` or
    `functools.partial(with_header, key="X-Trace", value="1")`.
    """
    for layer in layers:
        client = layer(client)
    return client


def with_context(inner: Client, ctx: Context) -> ClientFunc:
    """Submit a copy of each request bound to `ctx` instead of its own context."""

    def submit(request: HttpRequest) -> HttpResponse:
        return inner.submit(request.with_context(ctx))

    return ClientFunc(submit)


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.metadata.get("json", f.name): getattr(value, f.name) for f in dataclasses.fields(value)}
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def with_json_body(inner: Client, value: Any) -> ClientFunc:
    """Serialize `value` as JSON and use it as the request body."""

    def submit(request: HttpRequest) -> HttpResponse:
        try:
            payload = json.dumps(value, default=_json_default, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise EncodeError(f"cannot encode request body: {exc}") from exc

        request.body = io.BytesIO(payload)
        if "Content-Type" not in request.headers:
            request.headers["Content-Type"] = "application/json"
        return inner.submit(request)

    return ClientFunc(submit)


def with_header(inner: Client, key: str, value: str) -> ClientFunc:
    """Append `value` to the request's `key` header."""

    def submit(request: HttpRequest) -> HttpResponse:
        request.headers.add(key, value)
        return inner.submit(request)

    return ClientFunc(submit)


def check_status(inner: Client, code: int) -> ClientFunc:
    """Raise UnexpectedStatusError (carrying the response) unless the status is `code`."""

    def submit(request: HttpRequest) -> HttpResponse:
        response = inner.submit(request)
        if response.status_code != code:
            raise UnexpectedStatusError(code, response.status_code, response)
        return response

    return ClientFunc(submit)


def check_body(inner: Client) -> ClientFunc:
    """Raise MissingBodyError when the response has no body at all."""

    def submit(request: HttpRequest) -> HttpResponse:
        response = inner.submit(request)
        if response.body is None:
            raise MissingBodyError(response)
        return response

    return ClientFunc(submit)


def check_header_error(inner: Client, header: Optional[str] = None) -> ClientFunc:
    """
    Raise HeaderError when the response carries a non-empty error header.

    The header's presence is treated as failure regardless of status code.
    `header` defaults to ClientSettings.error_header, read once here.
    """
    name = header or load_client_settings().error_header

    def submit(request: HttpRequest) -> HttpResponse:
        response = inner.submit(request)
        value = header_value(response.headers, name)
        if value:
            raise HeaderError(name, value, response)
        return response

    return ClientFunc(submit)


def _field_lookup(dst: Any) -> dict[str, str]:
    """Map lowercased wire names to attribute names for a decode destination."""
    if dataclasses.is_dataclass(dst):
        lookup: dict[str, str] = {}
        for f in dataclasses.fields(dst):
            lookup.setdefault(str(f.metadata.get("json", f.name)).lower(), f.name)
            lookup.setdefault(f.name.lower(), f.name)
        return lookup
    return {name.lower(): name for name in vars(dst) if not name.startswith("_")}


def _populate(dst: Any, data: Any, response: HttpResponse) -> None:
    if isinstance(dst, dict):
        if not isinstance(data, dict):
            raise DecodeError(f"cannot decode JSON {type(data).__name__} into dict", response)
        dst.update(data)
        return
    if isinstance(dst, list):
        if not isinstance(data, list):
            raise DecodeError(f"cannot decode JSON {type(data).__name__} into list", response)
        dst[:] = data
        return
    if not isinstance(data, dict):
        raise DecodeError(f"cannot decode JSON {type(data).__name__} into {type(dst).__name__}", response)
    try:
        lookup = _field_lookup(dst)
    except TypeError as exc:
        raise DecodeError(f"unsupported decode destination {type(dst).__name__}", response) from exc
    for key, value in data.items():
        attr = lookup.get(str(key).lower())
        if attr is not None:
            setattr(dst, attr, value)


def decode_json(inner: Client, dst: Any) -> ClientFunc:
    """
    Decode the JSON response body into `dst`.

    `dst` may be a dict or list (filled in place), a dataclass instance
    (fields matched by `json` metadata or name, case-insensitively) or any
    object with instance attributes. The original body is fully read and
    closed; the response gets an in-memory copy so outer layers and the
    caller can still read it. A failed body read surfaces as DecodeError
    carrying the (closed) response, with the read error as its cause.
    """
    if dst is None:
        raise TypeError("decode_json destination must not be None")

    def submit(request: HttpRequest) -> HttpResponse:
        response = inner.submit(request)
        if response.body is None:
            raise DecodeError("cannot decode response without a body", response)
        try:
            raw = response.body.read()
        except Exception as exc:  # noqa: BLE001
            raise DecodeError(f"cannot read response body: {exc}", response) from exc
        finally:
            response.close()
        response.body = io.BytesIO(raw)

        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise DecodeError(f"invalid JSON response body: {exc}", response) from exc
        _populate(dst, data, response)
        return response

    return ClientFunc(submit)


def with_logging(inner: Client, log: Optional[logging.Logger] = None) -> ClientFunc:
    """Log each submission and its outcome; errors are re-raised unchanged."""
    target = log or logger

    def submit(request: HttpRequest) -> HttpResponse:
        started = time.perf_counter()
        try:
            response = inner.submit(request)
        except Exception as exc:
            target.warning(
                "%s %s failed after %.3fs [%s]: %s",
                request.method,
                request.url,
                time.perf_counter() - started,
                categorize_exception(exc).value,
                exc,
            )
            raise
        target.debug(
            "%s %s -> %s in %.3fs",
            request.method,
            request.url,
            response.status_code,
            time.perf_counter() - started,
        )
        return response

    return ClientFunc(submit)


__all__ = [
    "Layer",
    "chain",
    "check_body",
    "check_header_error",
    "check_status",
    "decode_json",
    "with_context",
    "with_header",
    "with_json_body",
    "with_logging",
]
