# tests/utils/test_logging_config.py
"""Unit tests for logging configuration utility.
=================================================

Tests for the logging setup utility in `tedi.utils.logging_config`.

This module verifies that `setup_logging`:
- Creates rotating file handlers for the main log and a separate error log
  when `separate_error_log` is enabled.
- Honors the configured levels for each handler.
- Can disable console logging when `log_to_console` is set to False.
- Attaches the key trace log only when ``TEDI_KEYTRACE`` is set.

Every test writes into a temporary directory to avoid touching real files.
"""

import logging
from collections.abc import Generator

import pytest

from tedi.utils import logging_config


@pytest.fixture(autouse=True)
def restore_root_handlers() -> Generator[None, None, None]:
    """Close and drop handlers installed by a test so files are released."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    for handler in root.handlers + logging_config.KEY_LOGGER.handlers:
        handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)
    logging_config.KEY_LOGGER.handlers = []


def test_setup_logging_creates_handlers(tmp_path, monkeypatch) -> None:
    """`setup_logging` should add rotating file handlers with proper levels.

    Scenario:
    - Console logging is disabled.
    - Separate error log is requested.
    - File handler level is INFO.

    Assertions:
    - Both a main rotating file handler (`editor.log`) and a separate error
      rotating file handler (`error.log`) are attached to the root logger.
    - The total number of handlers equals 2 (main + error).
    - Handler levels match the configuration.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TEDI_KEYTRACE", raising=False)

    logging_config.setup_logging(
        {
            "logging": {
                "file_level": "INFO",
                "console_level": "ERROR",
                "log_to_console": False,
                "separate_error_log": True,
            }
        }
    )

    root = logging.getLogger()
    names = {type(h).__name__ for h in root.handlers}

    assert "RotatingFileHandler" in names
    assert len(root.handlers) == 2
    assert root.handlers[0].level == logging.INFO
    assert root.handlers[1].level == logging.ERROR
    assert (tmp_path / "editor.log").exists()
    assert logging_config.KEY_LOGGER.disabled is True


def test_console_handler_and_log_dir(tmp_path, monkeypatch) -> None:
    """A console handler is added on request and files go to `log_dir`."""
    monkeypatch.delenv("TEDI_KEYTRACE", raising=False)
    log_dir = tmp_path / "logs"

    logging_config.setup_logging(
        {"logging": {"log_dir": str(log_dir), "log_to_console": True, "console_level": "warning"}}
    )

    root = logging.getLogger()
    stream_handlers = [h for h in root.handlers if type(h) is logging.StreamHandler]
    assert len(stream_handlers) == 1
    assert stream_handlers[0].level == logging.WARNING
    assert (log_dir / "editor.log").exists()


def test_key_trace_enabled_by_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("TEDI_KEYTRACE", "yes")

    logging_config.setup_logging({"logging": {"log_dir": str(tmp_path), "log_to_console": False}})

    assert logging_config.KEY_LOGGER.disabled is False
    assert logging_config.KEY_LOGGER.propagate is False
    logging_config.KEY_LOGGER.debug("key %r", "a")
    for handler in logging_config.KEY_LOGGER.handlers:
        handler.flush()
    assert "key 'a'" in (tmp_path / "keytrace.log").read_text(encoding="utf-8")


def test_setup_logging_twice_does_not_duplicate(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    config = {"logging": {"log_to_console": False}}
    logging_config.setup_logging(config)
    logging_config.setup_logging(config)
    assert len(logging.getLogger().handlers) == 1
