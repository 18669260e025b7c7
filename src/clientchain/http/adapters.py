# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory Client implementations for tests and offline use."""

from __future__ import annotations

from typing import Union

from .client import Client
from .models import HttpRequest, HttpResponse

StubOutcome = Union[HttpResponse, BaseException]


class StubClient(Client):
    """Deterministic, programmable Client for tests.

    Each URL maps to a response or to an exception that `submit` raises.
    Every submitted request is recorded in `requests`, after the context
    check, so a cancelled request shows up only through the raised error.
    """

    def __init__(self, responses: dict[str, StubOutcome] | None = None, *, check_context: bool = True):
        self._responses = dict(responses or {})
        self.check_context = check_context
        self.requests: list[HttpRequest] = []

    def add(self, url: str, outcome: StubOutcome) -> None:
        self._responses[url] = outcome

    def submit(self, request: HttpRequest) -> HttpResponse:
        if self.check_context:
            request.context.raise_if_done()
        self.requests.append(request)
        outcome = self._responses.get(request.url)
        if outcome is None:
            raise LookupError(f"No stubbed response configured for {request.url}")
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


__all__ = ["StubClient", "StubOutcome"]
