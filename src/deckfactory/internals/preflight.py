"""Checks that must pass before any transcript is touched."""

from __future__ import annotations

import logging
import shutil

from deckfactory.backend.notebooklm import NotebookLMCli
from deckfactory.internals.constants import GIT_BINARY, NLM_BINARY, SOFFICE_BINARIES
from deckfactory.internals.errors import MissingLoginError, MissingToolError

log = logging.getLogger("deckfactory")


# region check_dependencies
def check_dependencies() -> None:
    """
    Verify the external executables the batch shells out to are on PATH.

    Raises:
        MissingToolError: Naming the first missing tool and how to get it
    """
    if shutil.which(NLM_BINARY) is None:
        log.error(f"{NLM_BINARY} not found. Install: pip install notebooklm-mcp-cli")
        raise MissingToolError(f"{NLM_BINARY} not found. Install: pip install notebooklm-mcp-cli")

    if not any(shutil.which(binary) for binary in SOFFICE_BINARIES):
        log.error("LibreOffice (soffice) not found.")
        raise MissingToolError("LibreOffice (soffice) not found.")

    if shutil.which(GIT_BINARY) is None:
        log.error(f"{GIT_BINARY} not found.")
        raise MissingToolError(f"{GIT_BINARY} not found.")

    log.debug("All required tools found on PATH.")


# endregion


# region check_login
def check_login(backend: NotebookLMCli) -> None:
    """
    Verify the backend has a usable login.

    Raises:
        MissingLoginError: If `nlm login --check` fails
    """
    log.info("Checking NotebookLM login state...")
    if not backend.check_login():
        log.error("NotebookLM login missing. Run 'nlm login' on the runner once.")
        raise MissingLoginError("NotebookLM login missing. Run 'nlm login' on the runner once.")
    log.info("NotebookLM login OK.")


# endregion


# region run_preflight
def run_preflight(backend: NotebookLMCli) -> None:
    """All run preconditions, tools first."""
    check_dependencies()
    check_login(backend)


# endregion
