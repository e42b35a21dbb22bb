# tedi/utils/utils.py
"""
tedi.utils.utils
================

Core utility functions for the tedi editor.

Key functionalities include:
- Robust Configuration Loading: a hardcoded, built-in default configuration is
  recursively merged with user settings from `~/.config/tedi/config.toml`.
- Content source and sink: reading a file into lines with encoding detection
  (chardet) and writing the buffer text back in one synchronous write.
- Helper Utilities: deep-merging dictionaries.

The application is always runnable, even if the user configuration file is
missing or corrupted, by falling back to the embedded defaults.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import chardet
import toml

logger = logging.getLogger("tedi")

# --- Constants ---
APP_NAME = "tedi"
APP_VERSION = "0.1.0"
CONFIG_DIR = Path.home() / ".config" / "tedi"
CHARDET_SAMPLE_SIZE = 20 * 1024
CHARDET_MIN_CONFIDENCE = 0.75

# This dictionary is the ultimate fallback, ensuring the application can ALWAYS start.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "tab_size": 4,
        "quit_times": 3,
        "status_timeout": 5.0,
        "encoding": "utf-8",
    },
    "colors": {
        "normal": "default",
        "number": "red",
        "string": "magenta",
        "char_literal": "magenta",
        "comment": "cyan",
        "multiline_comment": "cyan",
        "status": "white",
    },
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
    },
    "languages": {},
}


class ContentDecodeError(ValueError):
    """Raised when bytes cannot be turned into editable text."""


# --- Helper Functions ---

def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring the application can always run.

    Args:
        config_path: Explicit TOML file to merge; defaults to
            `~/.config/tedi/config.toml`.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    user_config_path = config_path or CONFIG_DIR / "config.toml"
    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {user_config_path}")
        except (toml.TomlDecodeError, OSError) as e:
            logger.error(f"Could not parse user config '{user_config_path}': {e}. Using defaults.")

    return final_config


def decode_content(data: bytes, encoding: Optional[str] = None) -> tuple[str, str]:
    """
    Decodes *data* to text.

    If no *encoding* is given, chardet is asked for a guess; a confident guess
    is tried first, then UTF-8. An ``ascii`` guess is reported as UTF-8.

    Returns:
        ``(text, encoding_used)``.

    Raises:
        ContentDecodeError: If none of the candidate encodings can decode *data*.
    """
    if not data:
        return "", encoding or "utf-8"

    candidates: List[str] = []
    if encoding:
        candidates.append(encoding)
    else:
        result = chardet.detect(data[:CHARDET_SAMPLE_SIZE])
        guess = result.get("encoding")
        confidence = result.get("confidence") or 0.0
        logger.debug(f"Chardet detected encoding '{guess}' with confidence {confidence:.2f}")
        if guess and confidence >= CHARDET_MIN_CONFIDENCE:
            # ASCII is a subset of UTF-8.
            candidates.append("utf-8" if guess.lower() == "ascii" else guess)
        if "utf-8" not in (c.lower() for c in candidates):
            candidates.append("utf-8")

    for candidate in candidates:
        try:
            return data.decode(candidate), candidate
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Decoding with '{candidate}' failed: {e}")

    raise ContentDecodeError(f"content is not valid text (tried {', '.join(candidates)})")


def split_lines(text: str) -> List[str]:
    """Splits file text into rows; a final newline adds no row and CRLF endings are stripped."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_text_file(path: Union[str, Path], encoding: Optional[str] = None) -> tuple[List[str], str]:
    """
    Reads *path* and returns its lines and the encoding used.

    Raises:
        OSError: If the file cannot be read.
        ContentDecodeError: If the content is not valid text.
    """
    with open(path, "rb") as f:
        data = f.read()
    text, used = decode_content(data, encoding)
    logger.info(f"Read {len(data)} bytes from '{path}' as {used}")
    return split_lines(text), used


def write_text_file(path: Union[str, Path], text: str, encoding: str = "utf-8") -> int:
    """
    Writes *text* to *path*, truncating the file, and returns the byte count.

    Raises:
        OSError: If the file cannot be written.
        ContentDecodeError: If *text* cannot be encoded with *encoding*.
    """
    try:
        payload = text.encode(encoding)
    except (UnicodeEncodeError, LookupError) as e:
        raise ContentDecodeError(f"cannot encode content as {encoding}: {e}") from e

    target_dir = os.path.dirname(os.fspath(path))
    if target_dir and not os.path.isdir(target_dir):
        raise FileNotFoundError(f"directory does not exist: {target_dir}")

    with open(path, "wb") as f:
        f.write(payload)
    logger.debug(f"Wrote {len(payload)} bytes to '{path}'")
    return len(payload)
