"""PPTX to PDF conversion through a headless LibreOffice."""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path

from deckfactory.internals.constants import SOFFICE_BINARIES

log = logging.getLogger("deckfactory")


class LibreOfficeConverter:
    """Converts an office document to PDF with `soffice --convert-to pdf`.

    The exit status is all we get back; it doesn't guarantee a file was written,
    so callers check for the output themselves.
    """

    def __init__(self, binaries: tuple[str, ...] = SOFFICE_BINARIES) -> None:
        self.binaries = binaries

    # region convert
    def convert(self, input_pptx: Path, out_dir: Path) -> bool:
        """Write `<out_dir>/<input stem>.pdf`. Returns True if any LibreOffice binary exited 0."""
        out_dir.mkdir(parents=True, exist_ok=True)

        # A throwaway profile avoids lock files left behind by other soffice instances.
        with tempfile.TemporaryDirectory(prefix="deckfactory-lo-") as tmp_profile:
            for index, binary in enumerate(self.binaries):
                # Fallbacks only run when they're actually installed.
                if index > 0 and shutil.which(binary) is None:
                    continue
                if self._run(binary, input_pptx, out_dir, Path(tmp_profile)):
                    return True
        return False

    # endregion

    # region _run
    def _run(self, binary: str, input_pptx: Path, out_dir: Path, profile: Path) -> bool:
        cmd = [
            binary,
            "--headless",
            "--nologo",
            "--nodefault",
            "--nofirststartwizard",
            f"-env:UserInstallation={profile.resolve().as_uri()}",
            "--convert-to",
            "pdf",
            "--outdir",
            str(out_dir),
            str(input_pptx),
        ]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            log.debug(f"{binary} could not be started: {e}")
            return False

        if result.returncode != 0:
            log.debug(
                f"{binary} exited {result.returncode}: {(result.stderr or '').strip()[-500:]}"
            )
            return False
        return True

    # endregion
