"""Data models for transcripts, output artifacts and per-item outcomes."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePath

from deckfactory.internals import constants
from deckfactory.internals.config.define_config import UserConfig


# region ItemStatus
class ItemStatus(Enum):
    """Terminal status of one transcript in one run, as written to the manifest."""

    SKIPPED = "skipped"
    FAIL = "fail"
    PARTIAL = "partial"
    SUCCESS = "success"


# endregion


# region deck_name_for
def deck_name_for(transcript_path: str | Path) -> str:
    """
    Derive the deck name from a transcript path.

    Only the final path component is used, so directory parts (including any
    `..` segments) can never leak into output filenames.

    >>> deck_name_for("work/FSPtranskript/transcripts/sub/dir/Case 07.txt")
    'Case 07'
    """
    base = PurePath(transcript_path).name
    if base.endswith(constants.TRANSCRIPT_SUFFIX):
        base = base[: -len(constants.TRANSCRIPT_SUFFIX)]
    if base in {"", ".", ".."}:
        raise ValueError(f"Cannot derive a deck name from: {transcript_path}")
    return base


# endregion


# region WorkItem
@dataclass(frozen=True)
class WorkItem:
    """One transcript discovered in this run. Never persisted."""

    path: Path
    deck_name: str
    relpath: str  # Relative to the mirror root, for the manifest

    @classmethod
    def from_path(cls, path: Path, report_root: Path) -> WorkItem:
        """Build a work item, reporting its path relative to `report_root` when it lives under it."""
        try:
            rel = os.path.relpath(path, report_root)
        except ValueError:
            # Different drives on Windows
            rel = str(path)
        if rel.startswith(".."):
            rel = str(path)
        return cls(
            path=path,
            deck_name=deck_name_for(path),
            relpath=PurePath(rel).as_posix(),
        )


# endregion


# region ArtifactPair
@dataclass(frozen=True)
class ArtifactPair:
    """The PPTX and PDF outputs for one deck name."""

    pptx: Path
    pdf: Path

    @classmethod
    def for_deck(cls, cfg: UserConfig, deck_name: str) -> ArtifactPair:
        return cls(
            pptx=cfg.out_pptx_dir / f"{deck_name}{constants.PPTX_SUFFIX}",
            pdf=cfg.out_pdf_dir / f"{deck_name}{constants.PDF_SUFFIX}",
        )

    def is_complete(self) -> bool:
        """A deck is done when both files exist. No content or checksum comparison."""
        return self.pptx.is_file() and self.pdf.is_file()


# endregion


# region ItemOutcome
@dataclass(frozen=True)
class ItemOutcome:
    """What happened to one work item; mirrors the manifest row written for it."""

    item: WorkItem
    artifacts: ArtifactPair
    status: ItemStatus
    message: str
    source_id: str | None = None


# endregion
