"""
Basic logging setup; creates console and file handlers with run_id in every log line.
"""

import logging

from deckfactory.internals.paths import user_log_dir_path


def setup_logger(
    run_id: str,
    name: str = "deckfactory",
    level: int = logging.DEBUG,
    enable_trace: bool = False,
) -> logging.Logger:
    """
    Setup logging with console and file output.

    The run_id is included in every log line for traceability.
    Safe to call multiple times (won't create duplicate handlers).

    Args:
        run_id: ID of the current batch run
        name: Logger name (default: "deckfactory")
        level: Minimum log level (default: DEBUG)
        enable_trace: Debug mode; console shows DEBUG and a trace log is written too

    Returns:
        Configured logger instance

    Example:
        >>> log = setup_logger("a1b2c3d4")
        >>> log.info("Scanning for TXT transcripts...")
        2026-01-09 14:23:45 [INFO] Scanning for TXT transcripts... [run:a1b2c3d4]
    """

    logger = logging.getLogger(name)

    # If it's already configured, return the existing logger
    if logger.handlers:
        return logger

    logger.setLevel(level)

    # Keep our lines out of the root logger so subprocess-heavy libraries don't interleave.
    logger.propagate = False

    log_format = f"%(asctime)s [%(levelname)s] %(message)s [run:{run_id}]"
    formatter = logging.Formatter(log_format, datefmt="%Y-%m-%d %H:%M:%S")

    # Console handler (prints to terminal)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.DEBUG if enable_trace else logging.INFO)
    logger.addHandler(console_handler)

    # File handler; everything goes to file
    log_file = user_log_dir_path() / "deckfactory.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.DEBUG)
    logger.addHandler(file_handler)

    if enable_trace:
        trace_log_format = f"%(filename)s: %(funcName)s(), Line: %(lineno)d: - [%(levelname)s] %(asctime)s - %(message)s -- [run_id={run_id}]"
        trace_log_formatter = logging.Formatter(
            trace_log_format, datefmt="%Y-%m-%d %H:%M:%S"
        )
        trace_log_file = user_log_dir_path() / "trace_deckfactory.log"
        trace_file_handler = logging.FileHandler(trace_log_file, encoding="utf-8")
        trace_file_handler.setFormatter(trace_log_formatter)
        trace_file_handler.setLevel(logging.DEBUG)
        logger.addHandler(trace_file_handler)

    logger.info(f"Logger initialized. Writing to {log_file}")

    return logger
