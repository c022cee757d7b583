from __future__ import annotations

"""Configuration values for the in-flight counter.

Runtime settings are sourced from the repository root `config.yml` (or the
file named by ``INFLIGHT_COUNTER_CONFIG``). When no config file exists the
built-in defaults reproduce the legacy grep_in_flight.sh run: snapshot `out.txt`
and compare the two historical marker pairs.
"""

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml  # type: ignore[import-not-found]

from .line_counter import MarkerPair
from .snapshot import backup_path_for


# Root paths
CONFIG_ROOT = Path(__file__).resolve().parent.parent
CONFIG_ENV_VAR = "INFLIGHT_COUNTER_CONFIG"
CONFIG_PATH = CONFIG_ROOT / "config.yml"

DEFAULT_INPUT_FILE = "out.txt"
DEFAULT_BACKUP_SUFFIX = ".bak"
# "fininini" is what grep_in_flight.sh greps for; do not correct it here.
DEFAULT_MARKER_PAIRS: Tuple[MarkerPair, ...] = (
    MarkerPair("starting", "fininini"),
    MarkerPair("asdasd_start", "asdasd_end"),
)
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    input_file: Path = Path(DEFAULT_INPUT_FILE)
    backup_suffix: str = DEFAULT_BACKUP_SUFFIX
    marker_pairs: Tuple[MarkerPair, ...] = DEFAULT_MARKER_PAIRS
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[Path] = None
    report_path: Optional[Path] = None
    backup_file: Optional[Path] = field(default=None)

    @property
    def backup_path(self) -> Path:
        if self.backup_file is not None:
            return self.backup_file
        return backup_path_for(self.input_file, self.backup_suffix)

    def with_overrides(self, **changes: object) -> "Settings":
        """Return a copy with the non-None values in *changes* applied."""

        applied = {key: value for key, value in changes.items() if value is not None}
        settings = replace(self, **applied)
        _validate(settings)
        return settings


def _load_text(path: Path) -> str:
    """Load text using common encodings with BOM handling."""

    raw_bytes = path.read_bytes()
    for encoding in ("utf-8-sig", "utf-8", "gbk"):
        try:
            return raw_bytes.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise UnicodeDecodeError(
        "inflight_counter.config",
        raw_bytes,
        0,
        len(raw_bytes),
        "Unable to decode file using known encodings",
    )


def _load_yaml(path: Path) -> Dict:
    """Load YAML file into a Python dictionary."""

    text = _load_text(path)
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path.name} must contain a mapping at the top level")
    return data


def _coerce_marker_pairs(value: object) -> Tuple[MarkerPair, ...]:
    """Turn the YAML ``marker_pairs`` list into MarkerPair objects."""

    if value is None:
        return DEFAULT_MARKER_PAIRS
    if not isinstance(value, (list, tuple)) or not value:
        raise ValueError("marker_pairs must be a non-empty list")
    pairs: List[MarkerPair] = []
    for index, item in enumerate(value):
        if isinstance(item, dict):
            start, end = item.get("start"), item.get("end")
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            start, end = item
        else:
            raise ValueError(f"marker_pairs[{index}] must be a mapping with 'start' and 'end'")
        if not isinstance(start, str) or not isinstance(end, str):
            raise ValueError(f"marker_pairs[{index}]: 'start' and 'end' must be strings")
        pairs.append(MarkerPair(start, end))
    return tuple(pairs)


def _default_config_path() -> Path:
    """CONFIG_PATH unless the environment names another file."""

    return Path(os.environ.get(CONFIG_ENV_VAR) or CONFIG_PATH)


def _coerce_backup_suffix(value: object) -> str:
    if value is None:
        return DEFAULT_BACKUP_SUFFIX
    if not isinstance(value, str):
        raise ValueError("backup_suffix must be a string")
    return value


def _optional_path(value: object, base: Optional[Path] = None) -> Optional[Path]:
    if value is None or str(value).strip() == "":
        return None
    path = Path(str(value))
    if base is not None and not path.is_absolute():
        path = base / path
    return path


def _validate(settings: Settings) -> None:
    if not str(settings.input_file) or str(settings.input_file) == ".":
        raise ValueError("input_file must be a non-empty path")
    if not settings.backup_suffix and settings.backup_file is None:
        raise ValueError("backup_suffix must be non-empty")
    separators = {sep for sep in ("/", os.sep, os.altsep) if sep}
    if any(sep in settings.backup_suffix for sep in separators):
        raise ValueError(f"backup_suffix must not contain a path separator: {settings.backup_suffix!r}")
    try:
        settings.backup_path
    except ValueError as exc:
        raise ValueError(f"cannot derive a backup path from {settings.input_file}: {exc}") from exc
    if not isinstance(logging.getLevelName(str(settings.log_level).upper()), int):
        raise ValueError(f"unknown log_level: {settings.log_level!r}")
    if not settings.marker_pairs:
        raise ValueError("marker_pairs must be a non-empty list")
    for pair in settings.marker_pairs:
        if "\n" in pair.start or "\n" in pair.end:
            raise ValueError(f"markers must not contain newlines: {pair!r}")
    if settings.report_path is not None and settings.report_path.suffix.lower() != ".xlsx":
        raise ValueError("report_path must be a file name ending with .xlsx")


def load_settings(path: Optional[Path] = None) -> Settings:
    """Read *path* and return validated settings.

    Without *path* the file named by ``INFLIGHT_COUNTER_CONFIG`` is used,
    falling back to CONFIG_PATH; the variable is read on every call.

    A missing file is not an error; the defaults are returned instead. An
    explicitly requested file that does not exist raises FileNotFoundError.
    """

    explicit = path is not None
    config_path = Path(path) if explicit else _default_config_path()
    if not config_path.exists():
        if explicit:
            raise FileNotFoundError(f"Missing config file: {config_path}")
        logging.debug("[config] %s not found, using defaults", config_path)
        return Settings()

    data = _load_yaml(config_path)
    input_file = data.get("input_file", DEFAULT_INPUT_FILE)
    if not isinstance(input_file, str) or not input_file.strip():
        raise ValueError("input_file must be a non-empty string")

    settings = Settings(
        input_file=Path(input_file),
        backup_suffix=_coerce_backup_suffix(data.get("backup_suffix")),
        marker_pairs=_coerce_marker_pairs(data.get("marker_pairs")),
        log_level=str(data.get("log_level", DEFAULT_LOG_LEVEL)),
        log_file=_optional_path(data.get("log_file"), base=config_path.resolve().parent),
        report_path=_optional_path(data.get("report_path")),
    )
    _validate(settings)
    return settings


__all__ = [
    "CONFIG_ROOT",
    "CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "DEFAULT_INPUT_FILE",
    "DEFAULT_BACKUP_SUFFIX",
    "DEFAULT_MARKER_PAIRS",
    "DEFAULT_LOG_LEVEL",
    "Settings",
    "load_settings",
]
