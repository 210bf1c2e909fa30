"""Run-aborting error types.

Anything raised from here stops the whole batch; __main__ turns it into
the matching process exit code. Per-item problems never use these.
"""

from __future__ import annotations

from deckfactory.internals.constants import EXIT_FATAL, EXIT_MISSING_LOGIN


class DeckFactoryError(Exception):
    """Base class for fatal, run-aborting errors."""

    exit_code: int = EXIT_FATAL


class MissingToolError(DeckFactoryError):
    """A required external executable is not on PATH."""


class MissingLoginError(DeckFactoryError):
    """The generation backend reports no valid login."""

    exit_code = EXIT_MISSING_LOGIN


class MirrorSyncError(DeckFactoryError):
    """git could not clone or update the transcript mirror."""


class TranscriptDirMissingError(DeckFactoryError):
    """The mirror was refreshed but the transcript subdirectory isn't there."""


class NotebookSetupError(DeckFactoryError):
    """The target notebook could not be found or created."""


class ManifestWriteError(DeckFactoryError):
    """The manifest ledger could not be written."""


class WorkspaceSetupError(DeckFactoryError):
    """A working or output folder could not be created."""
