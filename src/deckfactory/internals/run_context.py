"""Per-run execution context.

A RunContext is created once per batch run and passed explicitly through
the orchestrator and the deck pipeline. It owns the attempt counter and the
manifest ledger, so nothing about a run lives in module-level state.
"""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from deckfactory.backend.notebooklm import NotebookLMCli
    from deckfactory.converter import LibreOfficeConverter
    from deckfactory.internals.config.define_config import UserConfig
    from deckfactory.internals.manifest import ManifestLedger


# region new_run_id
def new_run_id() -> str:
    """
    Return a fresh run ID.

    Resolution order:
    1. Environment variable `DECKFACTORY_RUN_ID`, so CI can correlate
       log lines with its own job ID.
    2. Fresh random 8-character hex string.
    """
    return os.environ.get("DECKFACTORY_RUN_ID") or uuid.uuid4().hex[:8]


# endregion


# region RunContext
@dataclass
class RunContext:
    """Everything one batch run needs, threaded through every call."""

    cfg: UserConfig
    ledger: ManifestLedger
    backend: NotebookLMCli
    converter: LibreOfficeConverter
    run_id: str = field(default_factory=new_run_id)

    # Items handed to the deck pipeline this run. Fast-path skips don't count.
    attempted: int = 0

    def cap_reached(self) -> bool:
        """True once the per-run attempt cap has been used up."""
        return self.attempted >= self.cfg.max_per_run

    def record_attempt(self) -> None:
        self.attempted += 1


# endregion
