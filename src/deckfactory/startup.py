"""Startup logic needed before anything else happens.

- Console encoding (Windows)
- Logging configuration, tagged with the run ID
"""

import logging

from deckfactory.internals.logger import setup_logger
from deckfactory.utils import get_debug_mode, setup_console_encoding


# region initialize_application
def initialize_application(
    run_id: str, debug_flag: bool | None = None
) -> logging.Logger:
    """Common startup tasks for every entry point."""

    # Windows console encoding must be set before any console output,
    # so we call this prior to setting up the logger.
    setup_console_encoding()

    log = setup_logger(run_id, enable_trace=get_debug_mode(debug_flag))
    log.info("Starting deckfactory log.")

    return log


# endregion
