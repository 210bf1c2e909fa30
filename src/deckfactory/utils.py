"""Utilities for use across the entire program."""

import io
import logging
import os
import platform
import sys

from deckfactory.internals import constants

log = logging.getLogger("deckfactory")


# region setup_console_encoding
def setup_console_encoding() -> None:
    """Configure UTF-8 encoding for Windows console so German deck names and umlauts print without UnicodeEncodeError."""
    if platform.system() == "Windows":
        sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8")


# endregion


# region get_debug_mode
def get_debug_mode(interface_flag: bool | None = None) -> bool:
    """
    Determine debug mode.
    Priority: explicit flag (CLI / config) > DECKFACTORY_DEBUG env var > DEBUG_MODE_DEFAULT (constants.py)
    """
    if interface_flag is not None:
        return interface_flag

    env_debug_str = os.environ.get("DECKFACTORY_DEBUG")
    if env_debug_str is not None:
        try:
            return str_to_bool(env_debug_str)
        except ValueError:
            # If the env var is set but invalid ("bob"), log a warning and fall through to default
            log.warning(
                f"Warning: Invalid value for DECKFACTORY_DEBUG env var: '{env_debug_str}'. Using default."
            )

    return constants.DEBUG_MODE_DEFAULT


# endregion


# region str_to_bool
def str_to_bool(value: str) -> bool:
    """Convert strings "True"/"False" to  booleans"""
    if value.lower().strip() in {"false", "f", "0", "no", "n"}:
        return False
    elif value.lower().strip() in {"true", "t", "1", "yes", "y"}:
        return True
    else:
        log.warning(f"{value} is not a valid boolean value.")
        raise ValueError(f"{value} is not a valid boolean value.")


# endregion
