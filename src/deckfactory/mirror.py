"""Keep the local checkout of the transcript repository current."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from deckfactory.internals.config.define_config import UserConfig
from deckfactory.internals.constants import GIT_BINARY
from deckfactory.internals.errors import MirrorSyncError, TranscriptDirMissingError

log = logging.getLogger("deckfactory")


# region refresh_transcript_mirror
def refresh_transcript_mirror(cfg: UserConfig) -> Path:
    """
    Clone the transcript repo, or hard-reset an existing clone to the remote head.

    Local changes in the mirror are discarded. Returns the transcripts directory.

    Raises:
        MirrorSyncError: If any git command fails or the clone target cannot be cleared
        TranscriptDirMissingError: If the configured subdirectory isn't in the checkout
    """
    mirror = cfg.mirror_dir

    if (mirror / ".git").is_dir():
        log.info(f"Updating transcripts repo: {mirror}")
        _git("-C", str(mirror), "fetch", "--all", "--prune")
        _git("-C", str(mirror), "reset", "--hard", "origin/HEAD")
    else:
        log.info(f"Cloning transcripts repo into: {mirror}")
        _prepare_clone_target(mirror)
        _git("clone", "--depth", "1", cfg.transcript_repo, str(mirror))

    transcripts = cfg.transcripts_dir
    if not transcripts.is_dir():
        log.error(f"Transcripts directory not found: {transcripts}")
        raise TranscriptDirMissingError(f"Transcripts directory not found: {transcripts}")
    return transcripts


# endregion


# region _prepare_clone_target
def _prepare_clone_target(mirror: Path) -> None:
    """Remove whatever sits at the clone target (stale folder or stray file) and create its parent."""
    try:
        if mirror.is_dir() and not mirror.is_symlink():
            log.warning(f"Removing stale non-git directory at {mirror}")
            shutil.rmtree(mirror)
        elif mirror.exists() or mirror.is_symlink():
            log.warning(f"Removing stray file at {mirror}")
            mirror.unlink()
        mirror.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        log.error(f"Could not prepare {mirror} for cloning: {e}")
        raise MirrorSyncError(f"Cannot prepare clone target {mirror}: {e}") from e


# endregion


# region _git
def _git(*args: str) -> None:
    cmd = [GIT_BINARY, *args]
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        log.error(f"Could not run git: {e}")
        raise MirrorSyncError(f"Could not run git: {e}") from e

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        log.error(f"git {' '.join(args)} failed: {stderr}")
        raise MirrorSyncError(f"{' '.join(cmd)} exited {result.returncode}: {stderr}")


# endregion
