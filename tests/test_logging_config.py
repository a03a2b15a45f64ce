"""Tests for logging configuration (LOG_LEVEL, LOG_FILE)."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from routines.infra.config import Settings
from routines.infra.logging_config import (
    configure_logging,
    configure_logging_from_settings,
    resolve_level,
)


pytestmark = pytest.mark.usefixtures("restore_root_logger")


def test_log_level_defaults_to_info(monkeypatch) -> None:
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FILE", raising=False)

    configure_logging()

    assert logging.getLogger().level == logging.INFO


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("DEBUG", logging.DEBUG),
        ("warning", logging.WARNING),
        ("ERROR", logging.ERROR),
        ("INVALID_LEVEL", logging.INFO),
    ],
)
def test_log_level_from_env(monkeypatch, raw: str, expected: int) -> None:
    monkeypatch.setenv("LOG_LEVEL", raw)
    monkeypatch.delenv("LOG_FILE", raising=False)

    configure_logging()

    assert logging.getLogger().level == expected


def test_resolve_level_ignores_non_level_attributes() -> None:
    # logging.basicConfig exists on the module but is not a level
    assert resolve_level("basicConfig") == logging.INFO
    assert resolve_level(None) == logging.INFO
    assert resolve_level(" debug ") == logging.DEBUG


def test_repeated_configuration_keeps_one_console_handler(monkeypatch) -> None:
    monkeypatch.delenv("LOG_FILE", raising=False)

    configure_logging(level=logging.INFO)
    configure_logging(level=logging.INFO)

    assert len(logging.getLogger().handlers) == 1


def test_log_file_adds_rotating_handler(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "routines.log"

    configure_logging(level=logging.INFO, log_file=log_path)
    logging.getLogger("routines.test").info("routine.saved name=%s", "walk")
    for handler in logging.getLogger().handlers:
        handler.flush()

    file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert "routine.saved name=walk" in log_path.read_text(encoding="utf-8")


def test_configure_from_settings(tmp_path: Path) -> None:
    settings = Settings(
        app_env="dev",
        log_level="DEBUG",
        log_file=tmp_path / "app.log",
        people_path=None,
    )

    configure_logging_from_settings(settings)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)


def test_configure_from_settings_without_file(monkeypatch) -> None:
    monkeypatch.setenv("LOG_FILE", "/should/not/be/used.log")
    settings = Settings(app_env="prod", log_level="INFO", log_file=None, people_path=None)

    configure_logging_from_settings(settings)

    assert not any(isinstance(h, RotatingFileHandler) for h in logging.getLogger().handlers)
