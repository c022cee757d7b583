import pandas as pd

from inflight_counter.line_counter import MarkerPair, PairCount
from inflight_counter.report_builder import (
    build_report_table,
    format_pair_report,
    write_report_workbook,
)
from inflight_counter.schema import (
    COLUMN_DIFFERENCE,
    COLUMN_END_MARKER,
    COLUMN_START_LINES,
    REPORT_COLUMNS,
    SUMMARY_SHEET_NAME,
)

RESULTS = [
    PairCount(MarkerPair("starting", "fininini"), started=5, finished=0),
    PairCount(MarkerPair("asdasd_start", "asdasd_end"), started=2, finished=3),
]


def test_format_pair_report_uses_fixed_labels():
    assert format_pair_report(RESULTS[1]) == [
        "starting lines: 2",
        "finished lines: 3",
        "difference: -1",
    ]


def test_build_report_table_keeps_order():
    table = build_report_table(RESULTS)
    assert list(table.columns) == REPORT_COLUMNS
    assert table[COLUMN_END_MARKER].tolist() == ["fininini", "asdasd_end"]
    assert table[COLUMN_DIFFERENCE].tolist() == [5, -1]


def test_build_report_table_empty():
    table = build_report_table([])
    assert table.empty
    assert list(table.columns) == REPORT_COLUMNS


def test_write_report_workbook(tmp_path):
    path = write_report_workbook(tmp_path / "reports" / "counts.xlsx", build_report_table(RESULTS))

    frame = pd.read_excel(path, sheet_name=SUMMARY_SHEET_NAME, engine="openpyxl")
    assert frame[COLUMN_START_LINES].tolist() == [5, 2]
    assert frame[COLUMN_DIFFERENCE].tolist() == [5, -1]
