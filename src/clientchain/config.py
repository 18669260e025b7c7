# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for clientchain."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"clientchain/{__version__}"
DEFAULT_ERROR_HEADER = "Errors"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass
class ClientSettings:
    """Defaults for the reference transport and the header-error check."""

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    error_header: str = DEFAULT_ERROR_HEADER

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("CLIENTCHAIN_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            user_agent=_str_env("CLIENTCHAIN_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("CLIENTCHAIN_HTTP_REDIRECTS", cls.allow_redirects),
            error_header=_str_env("CLIENTCHAIN_ERROR_HEADER", cls.error_header),
        )


def load_client_settings() -> ClientSettings:
    """Load client settings from environment with sensible defaults."""
    return ClientSettings.from_env()
