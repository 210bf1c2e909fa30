"""CLI Interface Logic (argparse etc)"""

import argparse
import logging
import sys
from dataclasses import fields, replace
from pathlib import Path
from typing import Mapping, Optional

from deckfactory import startup
from deckfactory.internals.config.define_config import UserConfig
from deckfactory.internals.constants import EXIT_FATAL, EXIT_OK
from deckfactory.internals.errors import DeckFactoryError
from deckfactory.internals.run_context import new_run_id
from deckfactory.orchestrator import build_run_context, run_batch
from deckfactory.utils import str_to_bool

log = logging.getLogger("deckfactory")


# region run
def run() -> int:
    """Run the CLI end to end and return the process exit code."""

    args = parse_args()

    run_id = new_run_id()
    startup.initialize_application(run_id, debug_flag=args.debug_mode)

    # Config problems are fatal, but they aren't bugs; no traceback needed.
    try:
        cfg = build_config_from_args(args)
    except (ValueError, FileNotFoundError) as e:
        log.error(f"Invalid configuration: {e}")
        return EXIT_FATAL

    if args.save_config:
        try:
            cfg.save_toml(Path(args.save_config))
        except (ValueError, OSError) as e:
            log.error(f"Could not save configuration: {e}")
            return EXIT_FATAL

    ctx = build_run_context(cfg, run_id=run_id)
    try:
        run_batch(ctx)
    except DeckFactoryError as e:
        log.error(f"Run aborted: {e}")
        return e.exit_code

    return EXIT_OK


# endregion


# region parse_args
def parse_args() -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns argparse.Namespace with all the UserConfig fields as attributes.
    Unset options are None so they don't clobber config file or env values.
    """
    parser = argparse.ArgumentParser(
        prog="deckfactory",
        description="Turn plain-text transcripts into German slide decks (PPTX + PDF) via NotebookLM",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Defaults, or whatever MAX_PER_RUN, OUT_PPTX_DIR, ... say in the environment
  deckfactory

  # Use config file
  deckfactory --config path/to/deckfactory.toml

  # Small trial run into a scratch folder
  deckfactory --max-per-run 2 --out-pptx-dir /tmp/decks --out-pdf-dir /tmp/decks_pdf
        """,
    )

    # Config file (special - loads other values)
    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to TOML configuration file. Keys match the long option names with underscores.",
    )
    parser.add_argument(
        "--save-config",
        type=str,
        dest="save_config",
        metavar="PATH",
        help="Write the effective configuration to this TOML file before running",
    )

    parser.add_argument(
        "--max-per-run",
        type=int,
        dest="max_per_run",
        metavar="N",
        help="Maximum transcripts to attempt this run; already-built decks don't count (default: 15)",
    )

    # Transcript source
    parser.add_argument(
        "--transcript-repo",
        type=str,
        dest="transcript_repo",
        metavar="URL",
        help="Git repository holding the transcripts",
    )
    parser.add_argument(
        "--transcript-dir",
        type=str,
        dest="transcript_dir",
        metavar="DIR",
        help="Subdirectory of the repository with the .txt files (default: transcripts)",
    )

    # Local folders
    parser.add_argument(
        "--work-dir",
        type=str,
        dest="work_dir",
        metavar="PATH",
        help="Working folder for the repository checkout (default: work)",
    )
    parser.add_argument(
        "--out-pptx-dir",
        type=str,
        dest="out_pptx_dir",
        metavar="PATH",
        help="Output folder for .pptx decks (default: decks)",
    )
    parser.add_argument(
        "--out-pdf-dir",
        type=str,
        dest="out_pdf_dir",
        metavar="PATH",
        help="Output folder for .pdf decks (default: decks_pdf)",
    )
    parser.add_argument(
        "--manifest-path",
        type=str,
        dest="manifest_path",
        metavar="PATH",
        help="CSV ledger of every attempt (default: manifest/manifest.csv)",
    )

    # Backend workspace
    parser.add_argument(
        "--notebook-alias",
        type=str,
        dest="notebook_alias",
        metavar="ALIAS",
        help="NotebookLM notebook alias to work in (default: deckfactory)",
    )
    parser.add_argument(
        "--notebook-name",
        type=str,
        dest="notebook_name",
        metavar="NAME",
        help="Display name used if the notebook has to be created (default: Deck Factory)",
    )

    parser.add_argument(
        "--debug",
        dest="debug_mode",
        type=str_to_bool,
        metavar="BOOL",
        help="Verbose console output and an extra trace log (default: DECKFACTORY_DEBUG or false)",
    )

    # Validate args match config fields
    _validate_args_match_config(parser)

    return parser.parse_args()


# endregion


# region build_config_from_args
def build_config_from_args(
    args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None
) -> UserConfig:
    """
    Build UserConfig from parsed arguments with proper priority.

    Priority order (highest to lowest):
    1. CLI arguments (if explicitly provided)
    2. Config file values (if --config provided)
    3. Environment variables (MAX_PER_RUN, OUT_PPTX_DIR, ...)
    4. UserConfig defaults

    Args:
        args: Parsed command line arguments
        environ: Environment to read; defaults to os.environ

    Returns:
        UserConfig instance with all values set
    """
    cfg = UserConfig.from_env(environ)

    if args.config:
        config_path = Path(args.config)
        log.info(f"Loading config from {config_path}")
        cfg = UserConfig.from_toml(config_path, base=cfg)

    # Override with CLI args (only if explicitly provided)
    overrides = {
        f.name: getattr(args, f.name)
        for f in fields(UserConfig)
        if getattr(args, f.name, None) is not None
    }
    if overrides:
        log.debug(f"Config values taken from CLI: {sorted(overrides)}")
        cfg = replace(cfg, **overrides)

    cfg.validate()

    return cfg


# endregion


# region _validate_args_match_config
def _validate_args_match_config(parser: argparse.ArgumentParser) -> None:
    """
    Ensure all UserConfig fields have corresponding CLI arguments.

    Catches someone adding a field to UserConfig but forgetting the matching
    CLI argument (or vice versa).

    Raises:
        RuntimeError: If there's a mismatch between config fields and CLI args
    """
    config_fields = {f.name for f in fields(UserConfig)}

    excluded_args = ["help", "config", "save_config"]
    arg_names = {
        action.dest for action in parser._actions if action.dest not in excluded_args
    }

    missing_in_args = config_fields - arg_names
    extra_in_args = arg_names - config_fields

    if missing_in_args:
        log.error(
            "UserConfig fields must have corresponding arg added to cli.parse_args()."
        )
        raise RuntimeError(
            f"CLI arguments missing for UserConfig fields: {missing_in_args}\n"
            "These config fields need corresponding arguments added to parse_args()"
        )

    if extra_in_args:
        log.error(
            "Unexpected CLI args that do not match UserConfig fields. Either add a UserConfig field, "
            "or, if the arg is truly CLI-specific (like --config), add it to excluded_args in _validate_args_match_config()."
        )
        raise RuntimeError(
            f"CLI arguments don't match UserConfig fields: {extra_in_args}\n"
            "Either remove these CLI args or add corresponding fields to UserConfig"
        )


# endregion


def main() -> None:
    """Development entry point - run CLI directly with `python -m deckfactory.cli`"""
    sys.exit(run())


if __name__ == "__main__":
    main()
