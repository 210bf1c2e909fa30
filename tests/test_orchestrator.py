"""Batch-level behaviour: idempotence, the per-run cap, the ledger and fatal errors.

The backend and converter are fakes and the mirror refresh is replaced, so
these tests only touch tmp_path.
"""

from pathlib import Path

import pytest

from deckfactory.backend.notebooklm import NotebookLMCli
from deckfactory.converter import LibreOfficeConverter
from deckfactory.internals import preflight as preflight_module
from deckfactory.internals.config.define_config import UserConfig
from deckfactory.internals.constants import EXIT_MISSING_LOGIN
from deckfactory.internals.errors import (
    ManifestWriteError,
    MirrorSyncError,
    MissingLoginError,
    WorkspaceSetupError,
)
from deckfactory.internals.manifest import ManifestLedger
from deckfactory.internals.run_context import RunContext
from deckfactory.models import ItemStatus
from deckfactory.orchestrator import RunSummary, build_run_context, run_batch
from tests.fakes import FakeBackend, FakeConverter


def _no_preflight(backend) -> None:
    return None


def _mirror_in_place(cfg: UserConfig) -> Path:
    return cfg.transcripts_dir


def _run(ctx: RunContext) -> RunSummary:
    return run_batch(ctx, preflight=_no_preflight, refresh_mirror=_mirror_in_place)


def _next_run(
    ctx: RunContext,
    backend: FakeBackend | None = None,
    converter: FakeConverter | None = None,
) -> RunContext:
    """A fresh context for a later run against the same folders and manifest."""
    return RunContext(
        cfg=ctx.cfg,
        ledger=ManifestLedger(ctx.cfg.manifest_path),
        backend=backend or FakeBackend(),  # type: ignore[arg-type]
        converter=converter or FakeConverter(),  # type: ignore[arg-type]
        run_id="testrun2",
    )


# region happy path and idempotence
def test_fresh_run_builds_every_deck(
    ctx: RunContext, make_transcripts, manifest_rows
) -> None:
    make_transcripts("a.txt", "sub/b.txt", "c.txt")

    summary = _run(ctx)

    assert summary.discovered == 3
    assert summary.attempted == 3
    assert summary.count(ItemStatus.SUCCESS) == 3
    assert not summary.cap_reached
    rows = manifest_rows()
    assert [r["deck_name"] for r in rows] == ["a", "c", "b"]
    assert {r["status"] for r in rows} == {"success"}
    for name in ("a", "b", "c"):
        assert (ctx.cfg.out_pptx_dir / f"{name}.pptx").is_file()
        assert (ctx.cfg.out_pdf_dir / f"{name}.pdf").is_file()


def test_second_run_skips_everything_without_remote_calls(
    ctx: RunContext, make_transcripts, manifest_rows
) -> None:
    make_transcripts("a.txt", "b.txt")
    _run(ctx)
    pptx_before = {p.name: p.read_bytes() for p in ctx.cfg.out_pptx_dir.iterdir()}

    backend = FakeBackend()
    converter = FakeConverter()
    summary = _run(_next_run(ctx, backend, converter))

    assert summary.attempted == 0
    assert summary.fast_path_skipped == 2
    assert summary.count(ItemStatus.SKIPPED) == 2
    # Only the notebook check talks to the backend; nothing per item.
    assert "add_source" not in backend.call_names()
    assert converter.calls == []
    assert [r["status"] for r in manifest_rows()] == ["success", "success", "skipped", "skipped"]
    assert {p.name: p.read_bytes() for p in ctx.cfg.out_pptx_dir.iterdir()} == pptx_before


def test_manifest_only_grows_across_runs(ctx: RunContext, make_transcripts) -> None:
    make_transcripts("a.txt", "b.txt")
    path = ctx.cfg.manifest_path

    snapshots = [path.read_bytes()]
    _run(ctx)
    snapshots.append(path.read_bytes())
    _run(_next_run(ctx))
    snapshots.append(path.read_bytes())

    for earlier, later in zip(snapshots, snapshots[1:]):
        assert later.startswith(earlier)
        assert len(later) > len(earlier)


def test_no_transcripts_ends_quietly(ctx: RunContext, make_transcripts, manifest_rows) -> None:
    make_transcripts()

    summary = _run(ctx)

    assert summary.discovered == 0
    assert summary.attempted == 0
    assert manifest_rows() == []


def test_missing_notebook_is_created_before_processing(
    ctx: RunContext, make_transcripts
) -> None:
    make_transcripts("a.txt")
    backend = FakeBackend(notebooks=[])

    _run(_next_run(ctx, backend))

    names = backend.call_names()
    assert names.index("create_notebook") < names.index("add_source")


# endregion


# region cap
def test_cap_limits_attempts(ctx: RunContext, make_transcripts, manifest_rows) -> None:
    make_transcripts(*(f"t{n}.txt" for n in range(5)))
    ctx.cfg.max_per_run = 2

    summary = _run(ctx)

    assert summary.attempted == 2
    assert summary.cap_reached
    assert [r["deck_name"] for r in manifest_rows()] == ["t0", "t1"]


def test_failed_attempts_count_against_cap(ctx: RunContext, make_transcripts, manifest_rows) -> None:
    make_transcripts("a.txt", "b.txt", "c.txt")
    ctx.cfg.max_per_run = 2
    backend = FakeBackend(fail_on={"add_source"})

    summary = _run(_next_run(ctx, backend))

    assert summary.attempted == 2
    assert summary.count(ItemStatus.FAIL) == 2
    assert [r["status"] for r in manifest_rows()] == ["fail", "fail"]


def test_skips_do_not_count_against_cap(
    ctx: RunContext, make_transcripts, make_complete_deck, manifest_rows
) -> None:
    make_transcripts("a.txt", "b.txt", "c.txt", "d.txt")
    make_complete_deck("a")
    make_complete_deck("c")
    ctx.cfg.max_per_run = 2

    summary = _run(ctx)

    assert summary.attempted == 2
    assert summary.fast_path_skipped == 2
    assert [(r["deck_name"], r["status"]) for r in manifest_rows()] == [
        ("a", "skipped"),
        ("b", "success"),
        ("c", "skipped"),
        ("d", "success"),
    ]


def test_eventually_everything_is_built(ctx: RunContext, make_transcripts) -> None:
    """With a cap of 2 and 5 transcripts, three runs finish the job."""
    make_transcripts(*(f"t{n}.txt" for n in range(5)))
    ctx.cfg.max_per_run = 2

    attempted = [_run(ctx).attempted]
    for _ in range(2):
        attempted.append(_run(_next_run(ctx)).attempted)

    assert attempted == [2, 2, 1]
    assert len(list(ctx.cfg.out_pdf_dir.glob("*.pdf"))) == 5


# endregion


# region partial items
def test_missing_pdf_is_partial_and_retried_next_run(
    ctx: RunContext, make_transcripts, manifest_rows
) -> None:
    make_transcripts("a.txt")
    first = _next_run(ctx, converter=FakeConverter("no_output"))

    summary = _run(first)
    assert summary.count(ItemStatus.PARTIAL) == 1
    assert (ctx.cfg.out_pptx_dir / "a.pptx").is_file()

    backend = FakeBackend()
    _run(_next_run(ctx, backend))

    assert "add_source" in backend.call_names()
    assert [r["status"] for r in manifest_rows()] == ["partial", "success"]


# endregion


# region error isolation and fatal errors
def test_unexpected_item_error_does_not_stop_the_batch(
    ctx: RunContext, make_transcripts, manifest_rows
) -> None:
    make_transcripts("a.txt", "b.txt")

    class FlakyConverter(FakeConverter):
        def convert(self, input_pptx: Path, out_dir: Path) -> bool:
            if input_pptx.stem == "a":
                raise RuntimeError("soffice crashed")
            return super().convert(input_pptx, out_dir)

    summary = _run(_next_run(ctx, converter=FlakyConverter()))

    assert summary.attempted == 2
    rows = manifest_rows()
    assert [(r["deck_name"], r["status"]) for r in rows] == [("a", "fail"), ("b", "success")]
    assert rows[0]["message"] == "unexpected error: RuntimeError"


def test_unnameable_transcript_does_not_stop_the_batch(
    ctx: RunContext, make_transcripts, manifest_rows
) -> None:
    make_transcripts("..txt", "a.txt")

    summary = _run(ctx)

    assert summary.discovered == 1
    assert [(r["deck_name"], r["status"]) for r in manifest_rows()] == [("a", "success")]


def test_missing_login_aborts_before_any_row(
    ctx: RunContext,
    make_transcripts,
    manifest_rows,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    make_transcripts("a.txt")
    monkeypatch.setattr(preflight_module.shutil, "which", lambda name: f"/usr/bin/{name}")
    backend = FakeBackend(logged_in=False)

    with pytest.raises(MissingLoginError) as excinfo:
        run_batch(
            _next_run(ctx, backend),
            preflight=preflight_module.run_preflight,
            refresh_mirror=_mirror_in_place,
        )

    assert excinfo.value.exit_code == EXIT_MISSING_LOGIN
    assert manifest_rows() == []
    assert backend.call_names() == ["check_login"]
    assert not ctx.cfg.out_pptx_dir.exists()


def test_mirror_failure_aborts_run(ctx: RunContext, fake_backend: FakeBackend) -> None:
    def broken_mirror(cfg: UserConfig) -> Path:
        raise MirrorSyncError("git clone exited 128")

    with pytest.raises(MirrorSyncError):
        run_batch(ctx, preflight=_no_preflight, refresh_mirror=broken_mirror)

    assert fake_backend.calls == []


def test_manifest_write_failure_aborts_run(ctx: RunContext, make_transcripts) -> None:
    make_transcripts("a.txt", "b.txt")
    ledger = ctx.ledger

    def failing_append(record) -> None:
        raise ManifestWriteError("disk full")

    ledger.append = failing_append  # type: ignore[method-assign]

    with pytest.raises(ManifestWriteError):
        _run(ctx)
    assert ctx.attempted == 0


def test_invalid_config_is_rejected_up_front(ctx: RunContext, fake_backend: FakeBackend) -> None:
    ctx.cfg.max_per_run = 0

    with pytest.raises(ValueError):
        _run(ctx)
    assert fake_backend.calls == []


# endregion


# region build_run_context
def test_build_run_context_wires_real_collaborators(cfg: UserConfig) -> None:
    ctx = build_run_context(cfg, run_id="abc12345")

    assert ctx.run_id == "abc12345"
    assert ctx.ledger.path == cfg.manifest_path
    assert isinstance(ctx.backend, NotebookLMCli)
    assert isinstance(ctx.converter, LibreOfficeConverter)
    assert ctx.attempted == 0


def test_summary_is_logged(
    ctx: RunContext, make_transcripts, caplog: pytest.LogCaptureFixture
) -> None:
    make_transcripts("a.txt")
    caplog.set_level("INFO", logger="deckfactory")

    _run(ctx)

    assert "Run complete. Processed (attempted) 1 transcript(s)." in caplog.text
    assert "success=1" in caplog.text


# endregion


def test_folder_creation_failure_aborts_run(ctx: RunContext, fake_backend: FakeBackend) -> None:
    ctx.cfg.out_pdf_dir.parent.mkdir(parents=True, exist_ok=True)
    ctx.cfg.out_pdf_dir.write_text("not a folder", encoding="utf-8")

    with pytest.raises(WorkspaceSetupError):
        _run(ctx)
    assert fake_backend.calls == []
