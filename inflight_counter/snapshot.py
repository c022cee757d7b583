from __future__ import annotations

"""Backup copy of the log file being counted."""

import logging
import shutil
from pathlib import Path
from typing import Union

LOGGER = logging.getLogger(__name__)


def backup_path_for(path: Union[str, Path], suffix: str = ".bak") -> Path:
    """``out.txt`` -> ``out.txt.bak``."""

    path = Path(path)
    return path.with_name(path.name + suffix)


def take_snapshot(source: Union[str, Path], backup: Union[str, Path]) -> Path:
    """Copy *source* to *backup* byte for byte, replacing any older backup.

    The writer may still be appending to *source*; counting the copy keeps
    every marker of a run on the same content.
    """

    source = Path(source)
    backup = Path(backup)
    if backup.parent and not backup.parent.exists():
        backup.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(source, backup)
    LOGGER.debug("[snapshot] %s -> %s (%d bytes)", source, backup, backup.stat().st_size)
    return backup
