from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dissertation_pipeline.logging_config import configure_logging, resolve_level


def test_configure_logging_adds_stream_handler() -> None:
    # Ensure configuring logging doesn't raise and attaches a StreamHandler
    configure_logging(None)
    root = logging.getLogger()
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)


def test_configure_logging_writes_to_file(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "pipeline.log"
    configure_logging(log_path)
    logging.getLogger("dissertation_pipeline.test").info("hello snapshot")
    for h in logging.getLogger().handlers:
        h.flush()
    assert "hello snapshot" in log_path.read_text(encoding="utf-8")
    configure_logging(None)


def test_resolve_level_accepts_names_and_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(logging.ERROR) == logging.ERROR
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert resolve_level() == logging.WARNING
    with pytest.raises(ValueError):
        resolve_level("chatty")


def test_driver_logs_quiet_unless_debug() -> None:
    configure_logging(None, "INFO")
    assert logging.getLogger("pymongo").level == logging.WARNING
    configure_logging(None, "DEBUG")
    assert logging.getLogger("pymongo").level == logging.DEBUG
    configure_logging(None, "INFO")
