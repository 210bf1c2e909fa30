"""Batch driver: preconditions, discovery, then one transcript at a time through the deck pipeline."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from deckfactory.backend.notebooklm import NotebookLMCli, ensure_notebook
from deckfactory.converter import LibreOfficeConverter
from deckfactory.discovery import discover_transcripts
from deckfactory.internals.config.define_config import UserConfig
from deckfactory.internals.constants import MSG_ALREADY_EXISTS
from deckfactory.internals.errors import DeckFactoryError
from deckfactory.internals.manifest import ManifestLedger
from deckfactory.internals.preflight import run_preflight
from deckfactory.internals.run_context import RunContext
from deckfactory.internals.scaffold import ensure_run_scaffold
from deckfactory.mirror import refresh_transcript_mirror
from deckfactory.models import ArtifactPair, ItemOutcome, ItemStatus, WorkItem
from deckfactory.pipelines.deck import run_deck_pipeline

log = logging.getLogger("deckfactory")


# region RunSummary
@dataclass
class RunSummary:
    """What one batch run did."""

    run_id: str
    discovered: int = 0
    attempted: int = 0
    fast_path_skipped: int = 0
    cap_reached: bool = False
    statuses: Counter[str] = field(default_factory=Counter)
    out_pptx_dir: Path | None = None
    out_pdf_dir: Path | None = None
    manifest_path: Path | None = None

    def count(self, status: ItemStatus) -> int:
        return self.statuses[status.value]

    def log_summary(self) -> None:
        log.info(f"Run complete. Processed (attempted) {self.attempted} transcript(s).")
        log.info(
            "  "
            + ", ".join(f"{s.value}={self.count(s)}" for s in ItemStatus)
            + f" (discovered {self.discovered})"
        )
        if self.cap_reached:
            log.info("  Stopped early: per-run limit reached.")
        log.info(f"Outputs: {self.out_pptx_dir}/, {self.out_pdf_dir}/")
        log.info(f"Manifest: {self.manifest_path}")


# endregion


# region build_run_context
def build_run_context(cfg: UserConfig, run_id: str | None = None) -> RunContext:
    """Wire up the real collaborators for a run."""
    ctx = RunContext(
        cfg=cfg,
        ledger=ManifestLedger(cfg.manifest_path),
        backend=NotebookLMCli(),
        converter=LibreOfficeConverter(),
    )
    if run_id is not None:
        ctx.run_id = run_id
    return ctx


# endregion


# region run_batch
def run_batch(
    ctx: RunContext,
    preflight: Callable[[NotebookLMCli], None] = run_preflight,
    refresh_mirror: Callable[[UserConfig], Path] = refresh_transcript_mirror,
) -> RunSummary:
    """
    Run one batch.

    Fatal problems (missing tools or login, mirror trouble, manifest writes)
    propagate as DeckFactoryError. Anything going wrong with a single transcript
    is recorded in the manifest and the loop moves on.
    """
    cfg = ctx.cfg
    cfg.validate()
    log_run_info(ctx)

    summary = RunSummary(
        run_id=ctx.run_id,
        out_pptx_dir=cfg.out_pptx_dir,
        out_pdf_dir=cfg.out_pdf_dir,
        manifest_path=ctx.ledger.path,
    )

    preflight(ctx.backend)
    ensure_run_scaffold(cfg, ctx.ledger)
    transcripts_dir = refresh_mirror(cfg)
    ensure_notebook(ctx.backend, cfg.notebook_alias, cfg.notebook_name)

    log.info("Scanning for TXT transcripts...")
    items = discover_transcripts(transcripts_dir, report_root=cfg.mirror_dir)
    summary.discovered = len(items)
    if not items:
        log.info(f"No .txt files found under: {transcripts_dir}")
        return summary

    log.info(f"Found {len(items)} transcript(s). MAX_PER_RUN={cfg.max_per_run}")

    for item in items:
        if ctx.cap_reached():
            log.info(f"Reached MAX_PER_RUN={cfg.max_per_run}. Exiting.")
            summary.cap_reached = True
            break

        artifacts = ArtifactPair.for_deck(cfg, item.deck_name)
        if artifacts.is_complete():
            # Fast path: no pipeline, no remote calls, and no hit on the cap.
            log.info(f"SKIP (already exists): {item.deck_name}")
            ctx.ledger.append_outcome(
                ItemOutcome(item, artifacts, ItemStatus.SKIPPED, MSG_ALREADY_EXISTS)
            )
            summary.fast_path_skipped += 1
            summary.statuses[ItemStatus.SKIPPED.value] += 1
            continue

        outcome = _process_item(ctx, item, artifacts)
        summary.statuses[outcome.status.value] += 1
        ctx.record_attempt()

    summary.attempted = ctx.attempted
    summary.log_summary()
    return summary


# endregion


# region _process_item
def _process_item(ctx: RunContext, item: WorkItem, artifacts: ArtifactPair) -> ItemOutcome:
    """Run the deck pipeline for one item; an unexpected crash becomes a fail row instead of ending the batch."""
    try:
        return run_deck_pipeline(ctx, item)
    except DeckFactoryError:
        raise
    except Exception as e:
        log.exception(f"Unexpected error while processing {item.deck_name}")
        outcome = ItemOutcome(
            item, artifacts, ItemStatus.FAIL, f"unexpected error: {type(e).__name__}"
        )
        ctx.ledger.append_outcome(outcome)
        return outcome


# endregion


# region log_run_info
def log_run_info(ctx: RunContext) -> None:
    """Dump this run's ID and effective config to the log."""
    log.info("=== Batch Run Started ===")
    log.info(f"Run ID: {ctx.run_id}")
    log.info(f"Transcripts: {ctx.cfg.transcript_repo} -> {ctx.cfg.transcripts_dir}")
    log.debug(f"Configuration: {ctx.cfg}")  # This will use the dataclass __repr__


# endregion
