from __future__ import annotations

"""Snapshot a log file and count the lines holding start/end markers.

The one-click workflow lives in `index.py`; `python -m inflight_counter`
runs the same thing through `cli.run_cli`.
"""

from .line_counter import MarkerPair, PairCount, count_matching_lines, count_pair
from .snapshot import backup_path_for, take_snapshot

__all__ = [
    "MarkerPair",
    "PairCount",
    "count_matching_lines",
    "count_pair",
    "backup_path_for",
    "take_snapshot",
]
