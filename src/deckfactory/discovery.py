"""Find the transcripts to work on."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from deckfactory.internals.constants import TRANSCRIPT_SUFFIX
from deckfactory.models import WorkItem

log = logging.getLogger("deckfactory")


# region discover_transcripts
def discover_transcripts(root: Path, report_root: Path | None = None) -> list[WorkItem]:
    """
    List every `.txt` file under `root`, recursively, as work items.

    Order is by the raw bytes of each path, not by locale collation, so every
    machine walks the transcripts in the same order. An empty list is a normal
    result, not an error. Files whose name yields no deck name are
    logged and left out.

    Args:
        root: Directory to scan
        report_root: Paths in the manifest are written relative to this (default: root)
    """
    report_root = report_root if report_root is not None else root

    # Exact, case-sensitive suffix match: Foo.TXT and Foo.srt are not transcripts.
    paths = [
        p for p in root.rglob(f"*{TRANSCRIPT_SUFFIX}")
        if p.suffix == TRANSCRIPT_SUFFIX and p.is_file()
    ]
    paths.sort(key=lambda p: os.fsencode(p))

    items = []
    for p in paths:
        try:
            items.append(WorkItem.from_path(p, report_root))
        except ValueError as e:
            # e.g. "..txt": no usable deck name, so no output file can be named after it
            log.warning(f"Ignoring transcript without a usable name: {e}")
    log.debug(f"Discovered {len(items)} transcript(s) under {root}")
    return items


# endregion
