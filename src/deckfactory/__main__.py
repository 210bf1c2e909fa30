"""Entry point for the deckfactory batch job."""

from __future__ import annotations

import logging
import sys

from deckfactory.cli import run as run_cli


def main() -> None:
    """Application entry point.

    Call like:
    ```
    python -m deckfactory
    deckfactory --max-per-run 5
    ```

    Exit codes: 0 normal completion (even if some transcripts failed; see the
    manifest), 1 fatal error or missing tool, 2 missing NotebookLM login.
    """
    try:
        exit_code = run_cli()
    except Exception:
        logging.getLogger("deckfactory").exception(
            "Unhandled exception - program crashed."
        )  # Logs full traceback
        raise  # Still crash, but now it's logged

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
