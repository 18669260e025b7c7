# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import threading
import time

import pytest

from clientchain.context import Context, background, with_cancel, with_deadline, with_timeout
from clientchain.errors import Cancelled, ContextError, DeadlineExceeded


def test_background_is_never_done():
    ctx = background()
    ctx.cancel()
    assert ctx.err() is None
    assert ctx.done() is False
    assert ctx.deadline is None
    assert ctx.remaining() is None
    ctx.raise_if_done()


def test_cancel_marks_child_done_but_not_parent():
    parent = with_cancel(background())
    child = with_cancel(parent)

    child.cancel()
    assert isinstance(child.err(), Cancelled)
    assert parent.err() is None


def test_parent_cancellation_propagates_to_descendants():
    parent = with_cancel(background())
    grandchild = with_cancel(with_cancel(parent))
    assert grandchild.done() is False

    parent.cancel()
    assert isinstance(grandchild.err(), Cancelled)
    with pytest.raises(ContextError):
        grandchild.raise_if_done()


def test_cancel_is_one_way_and_idempotent():
    ctx = with_cancel(background())
    ctx.cancel()
    assert ctx.reason() is Cancelled
    ctx.cancel()
    assert ctx.reason() is Cancelled
    assert isinstance(ctx.err(), Cancelled)


def _traceback_depth(exc: BaseException) -> int:
    depth = 0
    tb = exc.__traceback__
    while tb is not None:
        depth += 1
        tb = tb.tb_next
    return depth


def test_repeated_raises_do_not_share_error_state():
    ctx = with_cancel(background())
    ctx.cancel()

    raised = []
    for _ in range(3):
        with pytest.raises(Cancelled) as excinfo:
            ctx.raise_if_done()
        raised.append(excinfo.value)

    assert raised[0] is not raised[1] is not raised[2]
    assert len({_traceback_depth(exc) for exc in raised}) == 1

    raised[0].__cause__ = RuntimeError("first caller")
    assert ctx.err().__cause__ is None
    assert raised[1].__cause__ is None


def test_parent_deadline_reason_is_inherited():
    child = with_cancel(with_deadline(background(), time.monotonic() - 1))
    assert child.reason() is DeadlineExceeded
    assert child.err() is not child.err()


def test_deadline_in_the_past_is_exceeded():
    ctx = with_deadline(background(), time.monotonic() - 1)
    assert isinstance(ctx.err(), DeadlineExceeded)
    assert ctx.remaining() == 0.0


def test_child_deadline_is_bounded_by_parent():
    parent = with_timeout(background(), 1.0)
    child = with_timeout(parent, 60.0)
    assert child.deadline == parent.deadline
    assert 0.0 < child.remaining() <= 1.0

    tighter = with_timeout(parent, 0.5)
    assert tighter.deadline < parent.deadline


def test_timeout_expires(monkeypatch):
    now = [100.0]
    monkeypatch.setattr(time, "monotonic", lambda: now[0])
    ctx = with_timeout(background(), 5.0)
    assert ctx.err() is None
    now[0] = 105.0
    assert isinstance(ctx.err(), DeadlineExceeded)


def test_context_manager_cancels_on_exit():
    with with_timeout(background(), 60) as ctx:
        assert ctx.done() is False
    assert isinstance(ctx.err(), Cancelled)


def test_cancel_is_visible_across_threads():
    ctx = Context(background())
    seen = []

    worker = threading.Thread(target=lambda: seen.append(ctx.err()))
    ctx.cancel()
    worker.start()
    worker.join()
    assert isinstance(seen[0], Cancelled)
