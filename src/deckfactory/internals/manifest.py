"""Append-only CSV ledger of every processing attempt.

The ledger is an audit log. Nothing reads it back to make decisions:
whether a deck needs building is decided from the files on disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from deckfactory.internals.constants import MANIFEST_HEADER
from deckfactory.internals.errors import ManifestWriteError
from deckfactory.models import ItemOutcome, ItemStatus

log = logging.getLogger("deckfactory")


# region utc_timestamp
def utc_timestamp() -> str:
    """Current time as e.g. 2026-01-09T14:23:45Z."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


# endregion


# region ManifestRecord
@dataclass(frozen=True)
class ManifestRecord:
    """One row of the manifest."""

    transcript_relpath: str
    deck_name: str
    status: ItemStatus
    pptx_path: str
    pdf_path: str
    message: str
    timestamp_utc: str = field(default_factory=utc_timestamp)

    @classmethod
    def from_outcome(cls, outcome: ItemOutcome) -> ManifestRecord:
        return cls(
            transcript_relpath=outcome.item.relpath,
            deck_name=outcome.item.deck_name,
            status=outcome.status,
            pptx_path=str(outcome.artifacts.pptx),
            pdf_path=str(outcome.artifacts.pdf),
            message=outcome.message,
        )

    def to_line(self) -> str:
        """Render as one CSV line. The timestamp is bare; every other field is quoted."""
        quoted = [
            _quote(value)
            for value in (
                self.transcript_relpath,
                self.deck_name,
                self.status.value,
                self.pptx_path,
                self.pdf_path,
                self.message,
            )
        ]
        return ",".join([self.timestamp_utc, *quoted]) + "\n"


def _quote(value: str) -> str:
    """Wrap in double quotes, doubling any embedded ones."""
    return '"' + value.replace('"', '""') + '"'


# endregion


# region ManifestLedger
class ManifestLedger:
    """Owns the manifest file for a run. Only ever appends."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.rows_written = 0

    # region ensure
    def ensure(self) -> None:
        """Create the parent folder and the file with its header if missing. Never touches existing content."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self.path.exists():
                log.debug(f"Manifest already present at {self.path}")
                return
            self._create_with_header()
        except OSError as e:
            log.error(f"Failed to create manifest at {self.path}: {e}")
            raise ManifestWriteError(f"Cannot create manifest {self.path}: {e}") from e

    def _create_with_header(self) -> None:
        # "x" so a file created between the check and the open is never clobbered
        try:
            with open(self.path, "x", encoding="utf-8", newline="\n") as f:
                f.write(MANIFEST_HEADER + "\n")
        except FileExistsError:
            log.debug(f"Manifest appeared at {self.path} while creating it; keeping it")
            return
        log.info(f"Created manifest at {self.path}")

    # endregion

    # region append
    def append(self, record: ManifestRecord) -> None:
        """Append one row. A failed write stops the run; rows are never dropped silently."""
        try:
            with open(self.path, "a", encoding="utf-8", newline="\n") as f:
                f.write(record.to_line())
        except OSError as e:
            log.error(f"Failed to write manifest row to {self.path}: {e}")
            raise ManifestWriteError(f"Cannot append to manifest {self.path}: {e}") from e
        self.rows_written += 1

    def append_outcome(self, outcome: ItemOutcome) -> None:
        self.append(ManifestRecord.from_outcome(outcome))

    # endregion


# endregion
