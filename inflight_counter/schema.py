"""Column and sheet names shared by the report writers."""

COLUMN_START_MARKER = "开始标记"
COLUMN_END_MARKER = "结束标记"
COLUMN_START_LINES = "开始行数"
COLUMN_END_LINES = "结束行数"
COLUMN_DIFFERENCE = "差值"

REPORT_COLUMNS = [
    COLUMN_START_MARKER,
    COLUMN_END_MARKER,
    COLUMN_START_LINES,
    COLUMN_END_LINES,
    COLUMN_DIFFERENCE,
]

SUMMARY_SHEET_NAME = "标记统计"

# Console labels are fixed regardless of the markers being compared.
LABEL_STARTED = "starting lines"
LABEL_FINISHED = "finished lines"
LABEL_DIFFERENCE = "difference"
