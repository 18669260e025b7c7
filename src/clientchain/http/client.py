# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Client capability, function adapter and factory."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from ..config import ClientSettings, load_client_settings
from .models import HttpRequest, HttpResponse

SubmitFunc = Callable[[HttpRequest], HttpResponse]


@runtime_checkable
class Client(Protocol):
    """Anything that can submit a fully-formed request and return its response."""

    def submit(self, request: HttpRequest) -> HttpResponse: ...


class ClientFunc:
    """Adapter turning a plain `(request) -> response` function into a Client."""

    __slots__ = ("func",)

    def __init__(self, func: SubmitFunc):
        self.func = func

    def submit(self, request: HttpRequest) -> HttpResponse:
        return self.func(request)

    def __call__(self, request: HttpRequest) -> HttpResponse:
        return self.func(request)

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", None) or repr(self.func)
        return f"ClientFunc({name})"


def client_func(func: SubmitFunc) -> ClientFunc:
    """Decorator form of ClientFunc."""
    return ClientFunc(func)


def create_default_http_client(settings: ClientSettings | None = None) -> Client:
    """Factory for the default httpx-backed client."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_client_settings())


__all__ = ["Client", "ClientFunc", "SubmitFunc", "client_func", "create_default_http_client"]
