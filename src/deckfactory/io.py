# io.py
"""Read-side checks for downloaded pptx files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pptx
from pptx.slide import Slide

log = logging.getLogger("deckfactory")

# A generated deck far outside the requested 10-12 slides usually means the prompt was ignored.
EXPECTED_SLIDE_RANGE = (10, 12)


# region DeckInfo
@dataclass(frozen=True)
class DeckInfo:
    slide_count: int
    first_title: str | None


# endregion


# region inspect_deck
def inspect_deck(pptx_path: Path) -> DeckInfo | None:
    """
    Open a downloaded pptx with python-pptx and report what's in it.

    Purely informational: returns None (and logs a warning) if the file can't be read,
    but never raises, because the download's exit status decides the item's outcome.
    """
    try:
        prs = pptx.Presentation(str(pptx_path))
    except Exception as e:
        log.warning(f"Could not open downloaded deck {pptx_path}: {e}")
        return None

    slides = list(prs.slides)
    info = DeckInfo(slide_count=len(slides), first_title=_first_title(slides))

    low, high = EXPECTED_SLIDE_RANGE
    if not low <= info.slide_count <= high:
        log.warning(
            f"{pptx_path.name} has {info.slide_count} slide(s); expected {low}-{high}."
        )
    else:
        log.info(f"{pptx_path.name} has {info.slide_count} slides.")

    if info.first_title:
        preview = info.first_title[:40] + ("..." if len(info.first_title) > 40 else "")
        log.debug(f"First slide title: {preview}")

    return info


# endregion


# region _first_title
def _first_title(slides: list[Slide]) -> str | None:
    """Text of the first non-empty title placeholder."""
    for slide in slides:
        title = slide.shapes.title
        if title is not None and title.has_text_frame:
            text = title.text_frame.text.strip()
            if text:
                return text
    return None


# endregion
