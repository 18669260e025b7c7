# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for clientchain.

Chain activity is logged under the `clientchain` logger (see `with_logging`).
httpx and httpcore log every request on their own loggers at INFO/DEBUG, which
duplicates the chain's records, so they get a separate, quieter level.
"""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("CLIENTCHAIN_LOG_LEVEL", "WARNING").upper()
DEFAULT_TRANSPORT_LOG_LEVEL = os.getenv("CLIENTCHAIN_TRANSPORT_LOG_LEVEL", "WARNING").upper()
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def _level(name: str | None, fallback: str) -> int:
    return getattr(logging, (name or fallback).upper(), logging.WARNING)


def setup_logging(level: str | None = None, *, transport_level: str | None = None) -> None:
    """Configure root logging and the transport loggers' level."""
    logging.basicConfig(
        level=_level(level, DEFAULT_LOG_LEVEL),
        format="%(levelname)s %(name)s: %(message)s",
    )
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(_level(transport_level, DEFAULT_TRANSPORT_LOG_LEVEL))


__all__ = ["TRANSPORT_LOGGERS", "setup_logging"]
