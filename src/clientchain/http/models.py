# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models passed through a client chain."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, Optional

from ..context import Context, background
from .headers import Headers

Body = IO[bytes]


@dataclass
class HttpRequest:
    """
    A single outgoing request.

    Built once per submission and never shared between concurrent calls, so
    decorators may mutate headers, body or context in place before delegating.
    """

    method: str
    url: str
    headers: Headers = field(default_factory=Headers)
    body: Optional[Body] = None
    context: Context = field(default_factory=background)

    def with_context(self, ctx: Context) -> HttpRequest:
        """Return a copy bound to `ctx`; headers are cloned, the body stream is shared."""
        return HttpRequest(
            method=self.method,
            url=self.url,
            headers=self.headers.copy(),
            body=self.body,
            context=ctx,
        )

    def read_body(self) -> bytes:
        """Consume the body stream (if any) and return its bytes."""
        if self.body is None:
            return b""
        return self.body.read()


@dataclass
class HttpResponse:
    """
    A response as seen by the chain.

    `body` is a scoped resource: whoever stops reading it must call `close()`
    (or use the response as a context manager). `None` means the transport
    produced no body at all, which is different from an empty one.
    """

    status_code: int
    headers: Headers = field(default_factory=Headers)
    body: Optional[Body] = None
    url: Optional[str] = None
    request: Optional[HttpRequest] = field(default=None, repr=False)

    def read(self) -> bytes:
        """Read the remaining body bytes (empty when there is no body)."""
        if self.body is None:
            return b""
        return self.body.read()

    def close(self) -> None:
        """Release the body; safe to call more than once."""
        body = self.body
        if body is None:
            return
        close = getattr(body, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> HttpResponse:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["Body", "HttpRequest", "HttpResponse"]
