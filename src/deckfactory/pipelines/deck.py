# deck.py
"""Transcript to slide deck pipeline.

Steps for one transcript, each a hard gate:
    skip-check -> add source -> generate deck -> download pptx -> convert to pdf

Every terminal state writes exactly one manifest row. If a source was
registered, it is deleted again on the way out, whatever the outcome.
"""

from __future__ import annotations

import logging

from deckfactory.backend.notebooklm import BackendError
from deckfactory.backend.responses import SourceIdUnparsable, decode_source_id
from deckfactory.internals import constants
from deckfactory.internals.run_context import RunContext
from deckfactory.io import inspect_deck
from deckfactory.models import ArtifactPair, ItemOutcome, ItemStatus, WorkItem
from deckfactory.prompts import slide_deck_prompt

log = logging.getLogger("deckfactory")


# region run_deck_pipeline
def run_deck_pipeline(ctx: RunContext, item: WorkItem) -> ItemOutcome:
    """Build the pptx and pdf for one transcript and record the outcome in the manifest."""
    artifacts = ArtifactPair.for_deck(ctx.cfg, item.deck_name)

    if artifacts.is_complete():
        log.info(f"SKIP (already exists): {item.deck_name}")
        return _finish(
            ctx, item, artifacts, ItemStatus.SKIPPED, constants.MSG_ALREADY_EXISTS
        )

    log.info(f"Processing: {item.deck_name}")
    source_id: str | None = None
    try:
        source_id, outcome = _register_source(ctx, item, artifacts)
        if outcome is not None:
            return outcome
        return _build_deck(ctx, item, artifacts, source_id)
    finally:
        if source_id is not None:
            _delete_source(ctx, source_id)


# endregion


# region _register_source
def _register_source(
    ctx: RunContext, item: WorkItem, artifacts: ArtifactPair
) -> tuple[str | None, ItemOutcome | None]:
    """Add the transcript as a source. Returns (source_id, None) or (None, fail outcome)."""
    alias = ctx.cfg.notebook_alias

    log.info("Adding source to notebook...")
    try:
        response = ctx.backend.add_source(alias, item.path)
    except BackendError as e:
        log.debug(f"source add error for {item.deck_name}: {e}")
        return None, _fail(ctx, item, artifacts, constants.MSG_SOURCE_ADD_FAILED)

    decoded = decode_source_id(response)
    if isinstance(decoded, SourceIdUnparsable):
        log.debug(f"Unusable source add response for {item.deck_name}: {decoded.reason}")
        return None, _fail(ctx, item, artifacts, constants.MSG_SOURCE_ID_PARSE_FAILED)

    log.info(f"Source added. source_id={decoded.source_id}")
    log.debug(f"source_id matched shape '{decoded.shape}'")
    return decoded.source_id, None


# endregion


# region _build_deck
def _build_deck(
    ctx: RunContext, item: WorkItem, artifacts: ArtifactPair, source_id: str | None
) -> ItemOutcome:
    """Generate, download and convert. The caller owns source cleanup."""
    alias = ctx.cfg.notebook_alias

    log.info("Creating slide deck in Studio...")
    try:
        ctx.backend.create_slide_deck(alias, slide_deck_prompt())
    except BackendError as e:
        log.debug(f"studio create error for {item.deck_name}: {e}")
        return _fail(ctx, item, artifacts, constants.MSG_STUDIO_CREATE_FAILED, source_id)

    log.info("Downloading PPTX...")
    artifacts.pptx.parent.mkdir(parents=True, exist_ok=True)
    try:
        ctx.backend.download_slide_deck(alias, artifacts.pptx, fmt="pptx")
    except BackendError as e:
        log.debug(f"pptx download error for {item.deck_name}: {e}")
        return _fail(ctx, item, artifacts, constants.MSG_PPTX_DOWNLOAD_FAILED, source_id)

    inspect_deck(artifacts.pptx)

    log.info("Converting PPTX to PDF...")
    if not ctx.converter.convert(artifacts.pptx, artifacts.pdf.parent):
        return _partial(ctx, item, artifacts, constants.MSG_PDF_CONVERSION_FAILED, source_id)
    if not artifacts.pdf.is_file():
        return _partial(ctx, item, artifacts, constants.MSG_PDF_NO_OUTPUT, source_id)

    outcome = _finish(
        ctx, item, artifacts, ItemStatus.SUCCESS, constants.MSG_OK, source_id
    )
    log.info(f"DONE: {item.deck_name}")
    return outcome


# endregion


# region _delete_source
def _delete_source(ctx: RunContext, source_id: str) -> None:
    """Best-effort removal of the registered source. Never raises."""
    log.info(f"Cleanup: deleting source {source_id}")
    try:
        ctx.backend.delete_source(source_id, ctx.cfg.notebook_alias)
    except Exception as e:
        log.warning(f"Cleanup of source {source_id} failed (ignored): {e}")


# endregion


# region outcome helpers
def _fail(
    ctx: RunContext,
    item: WorkItem,
    artifacts: ArtifactPair,
    message: str,
    source_id: str | None = None,
) -> ItemOutcome:
    log.error(f"{message}: {item.deck_name}")
    return _finish(ctx, item, artifacts, ItemStatus.FAIL, message, source_id)


def _partial(
    ctx: RunContext,
    item: WorkItem,
    artifacts: ArtifactPair,
    message: str,
    source_id: str | None = None,
) -> ItemOutcome:
    log.warning(f"{message}: {item.deck_name}")
    return _finish(ctx, item, artifacts, ItemStatus.PARTIAL, message, source_id)


def _finish(
    ctx: RunContext,
    item: WorkItem,
    artifacts: ArtifactPair,
    status: ItemStatus,
    message: str,
    source_id: str | None = None,
) -> ItemOutcome:
    """Write the item's manifest row and hand back the outcome."""
    outcome = ItemOutcome(
        item=item,
        artifacts=artifacts,
        status=status,
        message=message,
        source_id=source_id,
    )
    ctx.ledger.append_outcome(outcome)
    return outcome


# endregion
