# internals/config/define_config.py
"""User configuration dataclass and validation."""

# region imports
from __future__ import annotations

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    # Python 3.10
    import tomli as tomllib  # type: ignore[no-redef]

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path, PurePosixPath
from typing import Any, Mapping, Optional

import tomli_w  # For writing (no stdlib equivalent yet)

from deckfactory.internals import constants
from deckfactory.internals.paths import repo_name_from_url

# endregion

log = logging.getLogger("deckfactory")

# Env var names match the ones the CI workflow already sets for the batch job.
ENV_VARS: dict[str, str] = {
    "max_per_run": "MAX_PER_RUN",
    "transcript_repo": "TRANSCRIPT_REPO",
    "transcript_dir": "TRANSCRIPT_DIR",
    "work_dir": "WORK_DIR",
    "out_pptx_dir": "OUT_PPTX_DIR",
    "out_pdf_dir": "OUT_PDF_DIR",
    "manifest_path": "MANIFEST_PATH",
    "notebook_alias": "NLM_NOTEBOOK_ALIAS",
    "notebook_name": "NLM_NOTEBOOK_NAME",
}

PATH_FIELDS = ("work_dir", "out_pptx_dir", "out_pdf_dir", "manifest_path")


# region class UserConfig
@dataclass
class UserConfig:
    """All user-configurable settings for a deckfactory batch run."""

    # region class fields

    # Maximum number of transcripts handed to the pipeline per run. Skips don't count.
    max_per_run: int = constants.DEFAULT_MAX_PER_RUN

    # region Transcript source
    transcript_repo: str = constants.DEFAULT_TRANSCRIPT_REPO
    transcript_dir: str = (
        constants.DEFAULT_TRANSCRIPT_DIR
    )  # Subdirectory of the mirror that holds the .txt files
    # endregion

    # region Local folders
    work_dir: Path = Path(constants.DEFAULT_WORK_DIR)
    out_pptx_dir: Path = Path(constants.DEFAULT_OUT_PPTX_DIR)
    out_pdf_dir: Path = Path(constants.DEFAULT_OUT_PDF_DIR)
    manifest_path: Path = Path(constants.DEFAULT_MANIFEST_PATH)
    # endregion

    # region Backend workspace
    notebook_alias: str = constants.DEFAULT_NOTEBOOK_ALIAS
    notebook_name: str = constants.DEFAULT_NOTEBOOK_NAME
    # endregion

    # Optional[bool] so "not set" can fall through to the env var / constant.
    debug_mode: Optional[bool] = None

    # endregion

    # region post_init
    def __post_init__(self) -> None:
        """Convert string inputs of path fields into Path objects."""
        for name in PATH_FIELDS:
            value = getattr(self, name)
            if value is not None and not isinstance(value, Path):
                setattr(self, name, Path(value))

    # endregion

    # region class methods (populate a new instance)

    # region from_env
    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> UserConfig:
        """
        Build a config from environment variables, falling back to defaults.

        Empty values count as unset, the same as `${VAR:-default}` in a shell.

        Raises:
            ValueError: If MAX_PER_RUN is set but isn't an integer
        """
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {}

        for field_name, var_name in ENV_VARS.items():
            raw = env.get(var_name)
            if raw is None or raw == "":
                continue
            if field_name == "max_per_run":
                try:
                    data[field_name] = int(raw)
                except ValueError as e:
                    error_msg = f"{var_name} must be an integer, got '{raw}'"
                    log.error(error_msg)
                    raise ValueError(error_msg) from e
            else:
                data[field_name] = raw

        if data:
            log.debug(f"Config values taken from environment: {sorted(data)}")
        return cls(**data)

    # endregion

    # region from_toml
    @classmethod
    def from_toml(cls, path: Path, base: UserConfig | None = None) -> UserConfig:
        """
        Load configuration from a TOML file.

        The TOML file should have flat key-value pairs matching the UserConfig field names.
        Keys not present in the file keep the value from `base` (or the dataclass default).

        Example TOML:
            max_per_run = 5
            out_pptx_dir = "~/decks"
            notebook_alias = "deckfactory-staging"

        Args:
            path: Path to the .toml config file
            base: Config to layer the file's values on top of

        Returns:
            UserConfig: Populated configuration object

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If TOML is invalid
        """
        path = Path(path)
        if not path.exists():
            error_msg = f"Config file not found: {path}"
            log.error(error_msg)
            raise FileNotFoundError(error_msg)
        if path.is_dir():
            error_msg = f"This is a directory (folder), not a toml file: {path}"
            log.error(error_msg)
            raise ValueError(error_msg)

        # Read in the TOML file; raise if there are syntax errors.
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            error_msg = f"Invalid TOML syntax in {path}. Check for missing or mismatched quote marks."
            log.error(error_msg)
            raise ValueError(error_msg) from e
        except PermissionError as e:
            error_msg = f"We hit a permission error when trying to access {path}"
            log.error(error_msg)
            raise ValueError(error_msg) from e

        if not data:
            log.warning(
                f"Config toml file loaded as empty, so no UserConfig fields were set from: {path}."
            )

        # Filter out any unexpected fields and warn
        valid_fields = {f.name for f in fields(cls)}
        unexpected = set(data.keys()) - valid_fields

        if unexpected:
            log.warning(
                f"Ignoring unexpected fields in TOML config: {', '.join(sorted(unexpected))}. "
                f"Check for typos. Valid fields: {', '.join(sorted(valid_fields))}"
            )
            data = {k: v for k, v in data.items() if k in valid_fields}

        for name in PATH_FIELDS:
            if name in data:
                data[name] = Path(data[name])

        return replace(base if base is not None else cls(), **data)

    # endregion

    # endregion

    # region derived locations
    @property
    def mirror_dir(self) -> Path:
        """Local checkout of the transcript repository, e.g. work/FSPtranskript."""
        return self.work_dir / repo_name_from_url(self.transcript_repo)

    @property
    def transcripts_dir(self) -> Path:
        """Directory scanned for transcripts inside the mirror."""
        return self.mirror_dir / self.transcript_dir

    # endregion

    # region save_toml
    def save_toml(self, path: Path) -> None:
        """
        Save configuration to a TOML file.

        Args:
            path: Where to save the .toml file
        """
        path = Path(path)

        if path.exists() and path.is_dir():
            error_msg = f"Cannot save config: path is a directory, not a file: {path}."
            log.error(error_msg)
            raise ValueError(error_msg)

        path.parent.mkdir(parents=True, exist_ok=True)

        # Filter out None values (TOML can't serialize None)
        data = {k: v for k, v in self.config_to_dict().items() if v is not None}

        try:
            with open(path, "wb") as f:
                tomli_w.dump(data, f)
            log.info(f"Saved toml config file at {path}")
        except PermissionError as e:
            error_msg = f"Permission denied writing to: {path}"
            log.error(error_msg)
            raise PermissionError(error_msg) from e
        except OSError as e:
            error_msg = f"Failed to write config file to {path}"
            log.error(error_msg)
            raise OSError(error_msg) from e

    # endregion

    # region config_to_dict
    def config_to_dict(self) -> dict[str, Any]:
        """Convert config to a TOML-serializable dict.
        Paths are written with forward slashes so the file works on every OS.
        """
        return {
            "max_per_run": self.max_per_run,
            "transcript_repo": self.transcript_repo,
            "transcript_dir": self.transcript_dir,
            "work_dir": self.work_dir.as_posix(),
            "out_pptx_dir": self.out_pptx_dir.as_posix(),
            "out_pdf_dir": self.out_pdf_dir.as_posix(),
            "manifest_path": self.manifest_path.as_posix(),
            "notebook_alias": self.notebook_alias,
            "notebook_name": self.notebook_name,
            "debug_mode": self.debug_mode,
        }

    # endregion

    # region validate
    def validate(self) -> None:
        """
        Validate intrinsic config values (no filesystem access).

        Catches:
            - A non-integer or non-positive max_per_run
            - Empty strings where a name or path is required
            - A transcript_dir that would escape the mirror checkout
        """
        # bool is a subclass of int; `max_per_run = true` in a TOML file is a typo, not 1.
        if isinstance(self.max_per_run, bool) or not isinstance(self.max_per_run, int):
            error_msg = f"max_per_run must be an integer, got {type(self.max_per_run).__name__}"
            log.error(error_msg)
            raise ValueError(error_msg)
        if self.max_per_run < 1:
            error_msg = f"max_per_run must be >= 1, got {self.max_per_run}"
            log.error(error_msg)
            raise ValueError(error_msg)

        for name in (
            "transcript_repo",
            "transcript_dir",
            "notebook_alias",
            "notebook_name",
        ):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                log.error(f"{name} must be a non-empty string")
                raise ValueError(f"{name} must be a non-empty string, got {value!r}")

        for name in PATH_FIELDS:
            if str(getattr(self, name)).strip() in {"", "."}:
                log.error(f"{name} must point somewhere")
                raise ValueError(f"{name} must be a non-empty path")

        sub = PurePosixPath(self.transcript_dir.replace("\\", "/"))
        if sub.is_absolute() or ".." in sub.parts:
            error_msg = f"transcript_dir must be a relative path inside the mirror, got '{self.transcript_dir}'"
            log.error(error_msg)
            raise ValueError(error_msg)

        if self.debug_mode is not None and not isinstance(self.debug_mode, bool):
            log.error(f"debug_mode must be a boolean, got {type(self.debug_mode).__name__}")
            raise ValueError(
                f"debug_mode must be a boolean, got {type(self.debug_mode).__name__}"
            )

        # Make sure the repo URL yields a usable mirror directory name.
        repo_name_from_url(self.transcript_repo)

    # endregion


# endregion
