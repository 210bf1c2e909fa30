"""Stand-ins for the external collaborators (nlm, LibreOffice) used across tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from deckfactory.backend.notebooklm import BackendError


class FakeBackend:
    """Records every call; each step can be told to fail."""

    def __init__(
        self,
        *,
        logged_in: bool = True,
        notebooks: Any = None,
        source_response: Any = None,
        fail_on: set[str] | None = None,
    ) -> None:
        self.logged_in = logged_in
        self.notebooks = notebooks if notebooks is not None else [{"alias": "deckfactory"}]
        self.source_response = (
            source_response if source_response is not None else {"source_id": "src-1"}
        )
        self.fail_on = fail_on or set()
        self.calls: list[tuple[Any, ...]] = []

    def _maybe_fail(self, name: str) -> None:
        if name in self.fail_on:
            raise BackendError(["nlm", name], 1, f"{name} exploded")

    def check_login(self) -> bool:
        self.calls.append(("check_login",))
        return self.logged_in

    def list_notebooks(self) -> Any:
        self.calls.append(("list_notebooks",))
        self._maybe_fail("list_notebooks")
        return self.notebooks

    def create_notebook(self, name: str, alias: str) -> None:
        self.calls.append(("create_notebook", name, alias))
        self._maybe_fail("create_notebook")

    def add_source(self, alias: str, transcript: Path) -> Any:
        self.calls.append(("add_source", alias, transcript))
        self._maybe_fail("add_source")
        return self.source_response

    def create_slide_deck(self, alias: str, prompt: str) -> None:
        self.calls.append(("create_slide_deck", alias))
        self._maybe_fail("create_slide_deck")

    def download_slide_deck(self, alias: str, output: Path, fmt: str = "pptx") -> None:
        self.calls.append(("download_slide_deck", alias, output, fmt))
        self._maybe_fail("download_slide_deck")
        output.write_bytes(b"not really a pptx")

    def delete_source(self, source_id: str, alias: str) -> None:
        self.calls.append(("delete_source", source_id, alias))
        self._maybe_fail("delete_source")

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


class FakeConverter:
    """mode: "ok" writes the pdf, "no_output" claims success without writing, "fail" reports failure."""

    def __init__(self, mode: str = "ok") -> None:
        self.mode = mode
        self.calls: list[tuple[Path, Path]] = []

    def convert(self, input_pptx: Path, out_dir: Path) -> bool:
        self.calls.append((input_pptx, out_dir))
        if self.mode == "fail":
            return False
        out_dir.mkdir(parents=True, exist_ok=True)
        if self.mode == "ok":
            (out_dir / f"{input_pptx.stem}.pdf").write_bytes(b"%PDF-1.4 fake")
        return True
