# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import importlib
import logging
import socket

import httpx

from clientchain import config, errors, log
from clientchain.config import DEFAULT_USER_AGENT
from clientchain.errors import ErrorCategory, categorize_exception


def test_client_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("CLIENTCHAIN_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("CLIENTCHAIN_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("CLIENTCHAIN_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("CLIENTCHAIN_ERROR_HEADER", "X-Errors")

    settings = config.load_client_settings()

    assert settings.timeout == 5.5
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.allow_redirects is False
    assert settings.error_header == "X-Errors"


def test_client_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("CLIENTCHAIN_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("CLIENTCHAIN_USER_AGENT", "   ")
    monkeypatch.setenv("CLIENTCHAIN_ERROR_HEADER", "")

    settings = config.load_client_settings()

    assert settings.timeout == config.ClientSettings.timeout
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.error_header == "Errors"


def test_non_positive_timeout_falls_back(monkeypatch):
    monkeypatch.setenv("CLIENTCHAIN_HTTP_TIMEOUT", "0")
    assert config.load_client_settings().timeout == config.ClientSettings.timeout


def test_redirects_truthy_variants(monkeypatch):
    for raw in ("1", "on", "YES"):
        monkeypatch.setenv("CLIENTCHAIN_HTTP_REDIRECTS", raw)
        assert config.load_client_settings().allow_redirects is True


def test_load_client_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("CLIENTCHAIN_HTTP_TIMEOUT", "7.7")
    assert config.load_client_settings().timeout == 7.7
    monkeypatch.setenv("CLIENTCHAIN_HTTP_TIMEOUT", "8.8")
    assert config.load_client_settings().timeout == 8.8


def test_setup_logging_uses_env_default(monkeypatch):
    monkeypatch.setenv("CLIENTCHAIN_LOG_LEVEL", "debug")
    importlib.reload(log)
    assert log.DEFAULT_LOG_LEVEL == "DEBUG"

    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    log.setup_logging()
    assert calls["level"] == logging.DEBUG
    log.setup_logging("bogus")
    assert calls["level"] == logging.WARNING


def test_setup_logging_quiets_transport_loggers(monkeypatch):
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)
    saved = {name: logging.getLogger(name).level for name in log.TRANSPORT_LOGGERS}
    try:
        log.setup_logging("debug")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

        log.setup_logging("debug", transport_level="info")
        assert logging.getLogger("httpx").level == logging.INFO

        monkeypatch.setenv("CLIENTCHAIN_TRANSPORT_LOG_LEVEL", "error")
        importlib.reload(log)
        log.setup_logging()
        assert logging.getLogger("httpcore").level == logging.ERROR
    finally:
        for name, level in saved.items():
            logging.getLogger(name).setLevel(level)


def test_categorize_exception_maps_package_errors():
    assert categorize_exception(None) is ErrorCategory.NONE
    assert categorize_exception(errors.Cancelled()) is ErrorCategory.CANCELLED
    assert categorize_exception(errors.DeadlineExceeded()) is ErrorCategory.TIMEOUT
    assert categorize_exception(errors.RequestConstructionError("bad")) is ErrorCategory.CONSTRUCTION_ERROR
    assert categorize_exception(errors.MissingBodyError()) is ErrorCategory.VALIDATION_ERROR
    assert categorize_exception(errors.UnexpectedStatusError(200, 404)) is ErrorCategory.VALIDATION_ERROR
    assert categorize_exception(errors.EncodeError("x")) is ErrorCategory.ENCODE_ERROR
    assert categorize_exception(errors.DecodeError("x")) is ErrorCategory.DECODE_ERROR


def test_categorize_exception_maps_transport_errors():
    assert categorize_exception(httpx.ReadTimeout("slow")) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused")) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(socket.gaierror("dns")) is ErrorCategory.DNS_ERROR
    assert categorize_exception(ConnectionResetError()) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(RuntimeError("boom")) is ErrorCategory.UNKNOWN_ERROR


def test_validation_errors_carry_details():
    err = errors.UnexpectedStatusError(200, 404)
    assert err.expected == 200
    assert err.actual == 404
    assert "200" in str(err) and "404" in str(err)
    assert err.response is None

    header_err = errors.HeaderError("Errors", "bad input")
    assert header_err.value == "bad input"
    assert "bad input" in str(header_err)
    assert isinstance(errors.RequestConstructionError("x"), ValueError)
