"""Working and output directory creation.

Creates, relative to the current directory unless configured otherwise:
- work/          (transcript mirror checkout lives here)
- decks/         (downloaded .pptx files)
- decks_pdf/     (converted .pdf files)
- manifest/manifest.csv (header only, on first run)

Safe to call repeatedly - never removes or overwrites anything.
"""

import logging

from deckfactory.internals.config.define_config import UserConfig
from deckfactory.internals.errors import WorkspaceSetupError
from deckfactory.internals.manifest import ManifestLedger

log = logging.getLogger("deckfactory")


def ensure_run_scaffold(cfg: UserConfig, ledger: ManifestLedger) -> None:
    """Create the work and output folders and make sure the manifest exists."""
    for folder in (cfg.work_dir, cfg.out_pptx_dir, cfg.out_pdf_dir):
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            log.error(f"Failed to create folder {folder}: {e}")
            raise WorkspaceSetupError(f"Cannot create folder {folder}: {e}") from e

    ledger.ensure()

    log.debug(
        f"Run folders ready: work={cfg.work_dir}, pptx={cfg.out_pptx_dir}, "
        f"pdf={cfg.out_pdf_dir}, manifest={ledger.path}"
    )
