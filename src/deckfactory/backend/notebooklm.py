"""Thin client for the NotebookLM command line (`nlm`, from notebooklm-mcp-cli).

Every call is a blocking subprocess. No timeouts are applied here; a hung
`nlm` call blocks the batch until the tool itself gives up.
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Sequence

from deckfactory.backend.responses import (
    NotebookListUnparsable,
    decode_notebook_list,
)
from deckfactory.internals.constants import NLM_BINARY
from deckfactory.internals.errors import NotebookSetupError

log = logging.getLogger("deckfactory")


# region BackendError
class BackendError(Exception):
    """An `nlm` call failed. Per-item; never stops the batch on its own."""

    def __init__(self, command: Sequence[str], returncode: int | None, stderr: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = f"exit {returncode}" if returncode is not None else "could not start"
        message = f"{' '.join(self.command[:3])} ... failed ({detail})"
        if self.stderr:
            message += f": {self.stderr.splitlines()[-1]}"
        super().__init__(message)


# endregion


# region NotebookLMCli
class NotebookLMCli:
    """Runs `nlm` subcommands and hands back parsed output."""

    def __init__(self, binary: str = NLM_BINARY) -> None:
        self.binary = binary

    # region _run
    def _run(self, *args: str) -> str:
        """Run one nlm subcommand and return its stdout. Raises BackendError on failure."""
        cmd = [self.binary, *args]
        log.debug(f"Running: {' '.join(cmd[:4])} ...")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise BackendError(cmd, None, str(e)) from e

        if result.returncode != 0:
            raise BackendError(cmd, result.returncode, result.stderr or "")
        return result.stdout

    def _run_json(self, *args: str) -> Any:
        cmd = [self.binary, *args]
        stdout = self._run(*args)
        try:
            return json.loads(stdout)
        except json.JSONDecodeError as e:
            raise BackendError(cmd, 0, f"output was not JSON: {e}") from e

    # endregion

    # region commands
    def check_login(self) -> bool:
        """True when `nlm login --check` succeeds."""
        try:
            self._run("login", "--check")
        except BackendError as e:
            log.debug(f"Login check failed: {e}")
            return False
        return True

    def list_notebooks(self) -> Any:
        return self._run_json("notebook", "list", "--json")

    def create_notebook(self, name: str, alias: str) -> None:
        self._run("notebook", "create", "--name", name, "--alias", alias, "--confirm")

    def add_source(self, alias: str, transcript: Path) -> Any:
        """Upload a transcript as a source and wait until the backend has ingested it."""
        return self._run_json(
            "source", "add", alias, "--file", str(transcript), "--wait", "--json"
        )

    def create_slide_deck(self, alias: str, prompt: str) -> None:
        self._run(
            "studio", "create", alias, "--type", "slide-deck", "--prompt", prompt, "--confirm"
        )

    def download_slide_deck(self, alias: str, output: Path, fmt: str = "pptx") -> None:
        self._run(
            "download", "slide-deck", alias, "--format", fmt, "--output", str(output)
        )

    def delete_source(self, source_id: str, alias: str) -> None:
        self._run("source", "delete", source_id, alias, "--confirm")

    # endregion


# endregion


# region ensure_notebook
def ensure_notebook(backend: NotebookLMCli, alias: str, name: str) -> None:
    """
    Make sure a notebook with `alias` exists, creating it if no listed notebook carries that alias.

    A failing or unreadable listing is treated as "not found". A failing create is fatal.
    """
    log.info(f"Ensuring notebook exists (alias: {alias}, name: {name})")

    try:
        listing = decode_notebook_list(backend.list_notebooks())
    except BackendError as e:
        log.warning(f"Could not list notebooks ({e}); will try to create '{alias}'.")
        listing = NotebookListUnparsable(str(e))

    if isinstance(listing, NotebookListUnparsable):
        log.warning(f"Notebook list unusable: {listing.reason}")
    elif listing.has_alias(alias):
        log.info(f"Notebook alias '{alias}' already exists.")
        return

    log.info(f"Creating notebook '{name}' with alias '{alias}'...")
    try:
        backend.create_notebook(name, alias)
    except BackendError as e:
        log.error(f"Notebook creation failed: {e}")
        raise NotebookSetupError(f"Could not create notebook '{alias}': {e}") from e
    log.info("Notebook created.")


# endregion
