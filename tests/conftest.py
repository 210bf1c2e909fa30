"""Shared fixtures"""

# tests/conftest.py
import csv
from pathlib import Path

import pytest

from deckfactory.internals.config.define_config import UserConfig
from deckfactory.internals.manifest import ManifestLedger
from deckfactory.internals.run_context import RunContext
from tests.fakes import FakeBackend, FakeConverter


@pytest.fixture
def cfg(tmp_path: Path) -> UserConfig:
    """Config with every folder under tmp_path."""
    return UserConfig(
        max_per_run=15,
        transcript_repo="https://example.com/org/FSPtranskript.git",
        transcript_dir="transcripts",
        work_dir=tmp_path / "work",
        out_pptx_dir=tmp_path / "decks",
        out_pdf_dir=tmp_path / "decks_pdf",
        manifest_path=tmp_path / "manifest" / "manifest.csv",
    )


@pytest.fixture
def ledger(cfg: UserConfig) -> ManifestLedger:
    """A ledger whose file already exists with its header."""
    ledger = ManifestLedger(cfg.manifest_path)
    ledger.ensure()
    return ledger


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def fake_converter() -> FakeConverter:
    return FakeConverter()


@pytest.fixture
def ctx(
    cfg: UserConfig,
    ledger: ManifestLedger,
    fake_backend: FakeBackend,
    fake_converter: FakeConverter,
) -> RunContext:
    """Run context wired to fakes; no subprocess ever runs."""
    return RunContext(
        cfg=cfg,
        ledger=ledger,
        backend=fake_backend,  # type: ignore[arg-type]
        converter=fake_converter,  # type: ignore[arg-type]
        run_id="testrun1",
    )


@pytest.fixture
def make_transcripts(cfg: UserConfig):
    """Create .txt files under the configured transcripts dir. Returns the dir."""

    def _make(*relpaths: str) -> Path:
        root = cfg.transcripts_dir
        root.mkdir(parents=True, exist_ok=True)
        for rel in relpaths:
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(f"Sprecher 1: Transkript {rel}\n", encoding="utf-8")
        return root

    return _make


@pytest.fixture
def make_complete_deck(cfg: UserConfig):
    """Put both output files for a deck name on disk."""

    def _make(deck_name: str) -> None:
        cfg.out_pptx_dir.mkdir(parents=True, exist_ok=True)
        cfg.out_pdf_dir.mkdir(parents=True, exist_ok=True)
        (cfg.out_pptx_dir / f"{deck_name}.pptx").write_bytes(b"pptx")
        (cfg.out_pdf_dir / f"{deck_name}.pdf").write_bytes(b"pdf")

    return _make


def read_manifest(path: Path) -> list[dict[str, str]]:
    """Parse the manifest CSV into dicts keyed by header."""
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


@pytest.fixture
def manifest_rows(cfg: UserConfig):
    """Callable returning the current manifest rows."""
    return lambda: read_manifest(cfg.manifest_path)


@pytest.fixture
def clean_debug_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Ensure debug env var is not set before test."""
    monkeypatch.delenv("DECKFACTORY_DEBUG", raising=False)
    return monkeypatch


@pytest.fixture
def clean_config_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every config env var so defaults are predictable."""
    from deckfactory.internals.config.define_config import ENV_VARS

    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
