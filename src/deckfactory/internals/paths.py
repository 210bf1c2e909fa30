"""Cross-platform path resolution.

Uses platformdirs to find the OS-appropriate location for log files. All
batch inputs and outputs (work dir, decks, manifest) are configured
explicitly and resolved relative to the current working directory.
"""

import os
from pathlib import Path

from platformdirs import (
    user_log_dir,
)  # Gives us the "right" place for logs on each OS

PACKAGE_NAME = "deckfactory"


# region user_log_dir_path
def user_log_dir_path() -> Path:
    """
    Directory for log files.

    Honors DECKFACTORY_LOG_DIR when set (CI runners usually want logs next to the workspace).

    Examples:
        Linux: /home/yourname/.local/state/deckfactory/log/
        macOS: /Users/YourName/Library/Logs/deckfactory/
    """
    override = os.environ.get("DECKFACTORY_LOG_DIR")
    log_dir = resolve_path(override) if override else Path(user_log_dir(PACKAGE_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


# endregion


# region resolve_path
def resolve_path(raw: str | Path) -> Path:
    """
    Expand ~ and ${VARS}; resolve to absolute path.

    Relative paths resolve relative to current working directory.
    """
    expanded = os.path.expandvars(str(raw))
    return Path(expanded).expanduser().resolve()


# endregion


# region repo_name_from_url
def repo_name_from_url(url: str) -> str:
    """Last path segment of a git remote, without a trailing .git.

    >>> repo_name_from_url("https://github.com/protokolFSP/FSPtranskript.git")
    'FSPtranskript'
    """
    tail = url.rstrip("/").replace(":", "/").rsplit("/", 1)[-1]
    if tail.endswith(".git"):
        tail = tail[: -len(".git")]
    if not tail:
        raise ValueError(f"Cannot derive a repository name from: {url!r}")
    return tail


# endregion
