# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Cancellation and deadline context attached to every request.

A Context is an immutable link in a parent chain plus a one-way "done" flag.
Children observe their parent: cancelling a parent (or reaching its deadline)
makes every descendant done as well, while cancelling a child never affects
the parent. Nothing here enforces timeouts on its own; transports read
`remaining()` and `err()` and are responsible for honoring them.
"""

from __future__ import annotations

import threading
import time
from typing import Optional

from .errors import Cancelled, ContextError, DeadlineExceeded


class Context:
    """Cancellation signal with an optional monotonic deadline."""

    def __init__(self, parent: Optional[Context] = None, deadline: Optional[float] = None):
        self._parent = parent
        self._deadline = deadline
        self._reason: Optional[type[ContextError]] = None
        self._lock = threading.Lock()

    @property
    def parent(self) -> Optional[Context]:
        return self._parent

    @property
    def deadline(self) -> Optional[float]:
        """Effective deadline on the `time.monotonic()` clock, or None."""
        inherited = self._parent.deadline if self._parent is not None else None
        if self._deadline is None:
            return inherited
        if inherited is None:
            return self._deadline
        return min(self._deadline, inherited)

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline (never negative), or None when unbounded."""
        deadline = self.deadline
        if deadline is None:
            return None
        return max(0.0, deadline - time.monotonic())

    def cancel(self) -> None:
        """Mark this context (and therefore its descendants) as cancelled."""
        with self._lock:
            if self._reason is None:
                self._reason = Cancelled

    def reason(self) -> Optional[type[ContextError]]:
        """Return the error class describing why the context is done, or None."""
        if self._reason is not None:
            return self._reason
        if self._parent is not None:
            inherited = self._parent.reason()
            if inherited is not None:
                return inherited
        if self._deadline is not None and time.monotonic() >= self._deadline:
            with self._lock:
                if self._reason is None:
                    self._reason = DeadlineExceeded
            return self._reason
        return None

    def err(self) -> Optional[ContextError]:
        """Return a new error describing why the context is done, or None while it is live.

        Each call builds its own instance so callers never share a traceback or cause.
        """
        reason = self.reason()
        return reason() if reason is not None else None

    def done(self) -> bool:
        return self.reason() is not None

    def raise_if_done(self) -> None:
        err = self.err()
        if err is not None:
            raise err

    def __enter__(self) -> Context:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.cancel()

    def __repr__(self) -> str:
        state = self._reason.__name__ if self._reason is not None else "live"
        return f"<Context {state} deadline={self.deadline!r}>"


class _BackgroundContext(Context):
    """Root context: never cancelled, no deadline."""

    def cancel(self) -> None:
        return None

    def reason(self) -> Optional[type[ContextError]]:
        return None

    def __repr__(self) -> str:
        return "<Context background>"


_BACKGROUND = _BackgroundContext()


def background() -> Context:
    """Return the shared root context (immutable, safe to share)."""
    return _BACKGROUND


def with_cancel(parent: Context) -> Context:
    """Derive a child that can be cancelled independently of its parent."""
    return Context(parent)


def with_deadline(parent: Context, deadline: float) -> Context:
    """Derive a child that is done once `time.monotonic()` reaches `deadline`."""
    return Context(parent, deadline=deadline)


def with_timeout(parent: Context, seconds: float) -> Context:
    """Derive a child that is done `seconds` from now."""
    return with_deadline(parent, time.monotonic() + seconds)


__all__ = [
    "Context",
    "background",
    "with_cancel",
    "with_deadline",
    "with_timeout",
]
