# tedi/utils/logging_config.py
"""tedi.utils.logging_config
===========================

Logging configuration for the tedi editor.

A full-screen curses application cannot print diagnostics to the terminal it
is drawing on, so everything goes to rotating log files by default. This module
defines the global logger objects and a single function, `setup_logging`,
which attaches handlers and levels based on the ``[logging]`` section of the
configuration.

Features:
    - Rotating file logging for general application events (editor.log).
    - Optional console logging to stderr with configurable log level.
    - Optional separate error log file (error.log) for ERROR and CRITICAL events.
    - Optional key event tracing (keytrace.log) enabled via the TEDI_KEYTRACE environment variable.
    - Automatic creation of the log directory, with fallback to the system temp directory on failure.
    - Safe reconfiguration: clears existing handlers to avoid duplicate logs when called multiple times.
    - Never raises; setup errors are reported to stderr and logging continues best-effort.

Globals:
    logger: Main application logger ("tedi").
    KEY_LOGGER: Logger for decoded key-press trace events ("tedi.keyevents").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


# ======================== Global loggers ========================
# Created at import time, unconfigured until ``setup_logging()`` runs.
logger = logging.getLogger("tedi")
KEY_LOGGER = logging.getLogger("tedi.keyevents")

FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"


def _ensure_dir(directory: str) -> str:
    """Return *directory* after creating it, or the temp dir if that fails."""
    if not directory:
        return ""
    try:
        os.makedirs(directory, exist_ok=True)
        return directory
    except OSError as e_mkdir:
        print(f"Error creating log directory '{directory}': {e_mkdir}", file=sys.stderr)
        fallback = tempfile.gettempdir()
        print(f"Logging to temporary directory: '{fallback}'", file=sys.stderr)
        return fallback


def _rotating_handler(
    filename: str, level: int, max_bytes: int, backups: int, fmt: str = FILE_FORMAT
) -> Optional[logging.Handler]:
    try:
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backups, encoding="utf-8"
        )
    except OSError as e_fh:
        print(
            f"Error setting up file logger for '{filename}': {e_fh}. File logging may be impaired.",
            file=sys.stderr,
        )
        return None
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level)
    return handler


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Up to four independent handlers are set up:

    1. File handler: rotating editor.log capturing everything from
       `file_level` (default DEBUG) upward.
    2. Console handler: optional `stderr` output whose threshold is
       `console_level` (default WARNING).
    3. Error-file handler: optional rotating error.log that stores
       only ERROR and CRITICAL events.
    4. Key-event handler: optional rotating keytrace.log enabled
       when ``TEDI_KEYTRACE`` is set to ``1/true/yes``; attached to the
       ``tedi.keyevents`` logger.

    Existing handlers on the root logger are cleared to avoid duplicate
    records when the function is invoked multiple times (e.g. in unit tests).

    Args:
        config (dict | None): Application configuration. Only the
            ``["logging"]`` sub-section is consulted; recognised keys are
            ``file_level``, ``console_level``, ``log_to_console``,
            ``separate_error_log`` and ``log_dir`` (default: current directory).
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})
    log_dir = _ensure_dir(logging_config.get("log_dir", ""))

    log_file_level_str = str(logging_config.get("file_level", "DEBUG")).upper()
    log_file_level = getattr(logging, log_file_level_str, logging.DEBUG)

    log_filename = os.path.join(log_dir, "editor.log")
    file_handler = _rotating_handler(log_filename, log_file_level, 2 * 1024 * 1024, 5)

    # Console Handler
    console_handler = None
    if logging_config.get("log_to_console", True):
        console_level_str = str(logging_config.get("console_level", "WARNING")).upper()
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s")
        )
        console_handler.setLevel(getattr(logging, console_level_str, logging.WARNING))

    # Optional Separate Error Log File
    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        error_file_handler = _rotating_handler(
            os.path.join(log_dir, "error.log"), logging.ERROR, 1 * 1024 * 1024, 3
        )

    # Configure the root logger
    root_logger = logging.getLogger()
    root_logger.handlers = []  # Clear existing root handlers to avoid duplicates

    for handler in (file_handler, console_handler, error_file_handler):
        if handler:
            root_logger.addHandler(handler)

    root_logger.setLevel(log_file_level)

    # Key Event Logger
    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    KEY_LOGGER.handlers = []
    KEY_LOGGER.disabled = False

    if os.environ.get("TEDI_KEYTRACE", "").lower() in {"1", "true", "yes"}:
        key_trace_filename = os.path.join(log_dir, "keytrace.log")
        key_trace_handler = _rotating_handler(
            key_trace_filename, logging.DEBUG, 1 * 1024 * 1024, 3, "%(asctime)s - %(message)s"
        )
        if key_trace_handler:
            KEY_LOGGER.addHandler(key_trace_handler)
            logging.info("Key event tracing enabled, logging to '%s'.", key_trace_filename)
        else:
            KEY_LOGGER.disabled = True
    else:
        KEY_LOGGER.addHandler(logging.NullHandler())
        KEY_LOGGER.disabled = True
        logging.debug("Key event tracing is disabled.")

    logging.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
    if file_handler:
        logging.info(
            f"File logging to '{log_filename}' at level: {logging.getLevelName(file_handler.level)}."
        )
    if console_handler:
        logging.info(
            f"Console logging to stderr at level: {logging.getLevelName(console_handler.level)}."
        )
    if error_file_handler:
        logging.info("Error logging to 'error.log' at level: ERROR.")
