from __future__ import annotations

"""Console lines and Excel workbook for marker counts."""

import unicodedata
from pathlib import Path
from typing import Iterable, List, Union

import pandas as pd

from .line_counter import PairCount
from .schema import (
    COLUMN_DIFFERENCE,
    COLUMN_END_LINES,
    COLUMN_END_MARKER,
    COLUMN_START_LINES,
    COLUMN_START_MARKER,
    LABEL_DIFFERENCE,
    LABEL_FINISHED,
    LABEL_STARTED,
    REPORT_COLUMNS,
    SUMMARY_SHEET_NAME,
)


def format_pair_report(result: PairCount) -> List[str]:
    """Return the three stdout lines for one marker pair."""

    return [
        f"{LABEL_STARTED}: {result.started}",
        f"{LABEL_FINISHED}: {result.finished}",
        f"{LABEL_DIFFERENCE}: {result.difference}",
    ]


def build_report_table(results: Iterable[PairCount]) -> pd.DataFrame:
    """One row per marker pair, in run order."""

    rows = [
        {
            COLUMN_START_MARKER: result.pair.start,
            COLUMN_END_MARKER: result.pair.end,
            COLUMN_START_LINES: result.started,
            COLUMN_END_LINES: result.finished,
            COLUMN_DIFFERENCE: result.difference,
        }
        for result in results
    ]
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def _disp_len(val: object) -> int:
    # Full-width/East Asian chars count as width 2
    if val is None:
        return 0
    best = 0
    for line in str(val).splitlines():
        width = sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in line)
        best = max(best, width)
    return best


def write_report_workbook(output_path: Union[str, Path], table: pd.DataFrame) -> Path:
    """Write *table* to a single-sheet workbook and auto-fit its columns."""

    from openpyxl.utils import get_column_letter  # type: ignore

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(str(output_path), engine="openpyxl") as writer:
        table.to_excel(writer, index=False, sheet_name=SUMMARY_SHEET_NAME)
        ws = writer.sheets[SUMMARY_SHEET_NAME]
        for col_idx in range(1, (ws.max_column or 0) + 1):
            max_len = 0
            for row_idx in range(1, (ws.max_row or 0) + 1):
                max_len = max(max_len, _disp_len(ws.cell(row=row_idx, column=col_idx).value))
            width = min(80.0, max(8.0, max_len * 1.2 + 2.0))
            ws.column_dimensions[get_column_letter(col_idx)].width = width
    return output_path
