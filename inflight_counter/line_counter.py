from __future__ import annotations

"""Core logic for counting marker lines in a log snapshot."""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Union

PathLike = Union[str, Path]


@dataclass(frozen=True)
class MarkerPair:
    """A start marker and the end marker that closes it."""

    start: str
    end: str


@dataclass(frozen=True)
class PairCount:
    """Line counts for one marker pair."""

    pair: MarkerPair
    started: int
    finished: int

    @property
    def difference(self) -> int:
        return self.started - self.finished


def count_lines_containing(lines: Iterable[bytes], marker: str) -> int:
    """Count the lines that contain *marker* as a literal substring."""

    needle = marker.encode("utf-8")
    return sum(1 for line in lines if needle in line)


def count_matching_lines(path: PathLike, marker: str) -> int:
    """Return how many lines of *path* contain *marker*.

    Works on raw bytes split at ``\\n`` so the result matches
    ``grep MARKER FILE | wc -l`` for literal markers: a trailing line
    without a newline still counts, and a line counts once no matter how
    often the marker repeats on it.
    """

    with open(path, "rb") as handle:
        return count_lines_containing(handle, marker)


def count_pair(path: PathLike, pair: MarkerPair) -> PairCount:
    """Count both markers of *pair* in *path*, start first."""

    started = count_matching_lines(path, pair.start)
    finished = count_matching_lines(path, pair.end)
    return PairCount(pair=pair, started=started, finished=finished)
