# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Client implementation."""

from __future__ import annotations

import io

import httpx

from ..config import ClientSettings, load_client_settings
from ..errors import DeadlineExceeded
from .client import Client
from .headers import Headers
from .models import HttpRequest, HttpResponse


class _StreamBody(io.RawIOBase):
    """Readable, closable view over a streamed httpx response."""

    def __init__(self, response: httpx.Response):
        super().__init__()
        self._response = response
        self._chunks = response.iter_bytes()
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # noqa: ANN001
        while not self._pending:
            try:
                self._pending = next(self._chunks)
            except StopIteration:
                return 0
        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size

    def close(self) -> None:
        if not self.closed:
            self._response.close()
        super().close()


class HttpxClient(Client):
    """
    Synchronous httpx transport for the innermost position of a chain.

    The request context is checked before any I/O and its remaining time caps
    the httpx timeout; a request already on the wire cannot be interrupted.
    The returned body is streamed and must be closed by the caller.
    """

    def __init__(self, settings: ClientSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_client_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
        )

    def _timeout_for(self, request: HttpRequest) -> float:
        remaining = request.context.remaining()
        if remaining is None:
            return self.settings.timeout
        return min(self.settings.timeout, remaining)

    def submit(self, request: HttpRequest) -> HttpResponse:
        ctx = request.context
        ctx.raise_if_done()

        headers = request.headers.copy()
        if "User-Agent" not in headers:
            headers["User-Agent"] = self.settings.user_agent
        content = request.read_body() if request.body is not None else None

        outgoing = self._client.build_request(
            request.method,
            request.url,
            headers=headers.multi_items(),
            content=content,
            timeout=self._timeout_for(request),
        )
        try:
            resp = self._client.send(outgoing, stream=True, follow_redirects=self.settings.allow_redirects)
        except httpx.TimeoutException as exc:
            err = ctx.err()
            if isinstance(err, DeadlineExceeded):
                raise err from exc
            raise

        return HttpResponse(
            status_code=resp.status_code,
            headers=Headers(resp.headers.multi_items()),
            body=io.BufferedReader(_StreamBody(resp)),
            url=str(resp.url),
            request=request,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpxClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()
