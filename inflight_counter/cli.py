from __future__ import annotations

"""Command-line entry point for the in-flight counter."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from .config import Settings, load_settings
from .line_counter import MarkerPair, PairCount, count_pair
from .log_setup import setup_logging
from .report_builder import build_report_table, format_pair_report, write_report_workbook
from .snapshot import take_snapshot

LOGGER = logging.getLogger(__name__)


def parse_cli_arguments(argv: List[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments; every flag is optional."""

    parser = argparse.ArgumentParser(
        description="备份日志快照并统计开始/结束标记行数的差值",
    )
    parser.add_argument("--config", type=Path, help="配置文件路径，默认使用仓库根目录 config.yml")
    parser.add_argument("--input", type=Path, help="要统计的日志文件，默认 out.txt")
    parser.add_argument("--backup", type=Path, help="快照文件路径，默认 <input>.bak")
    parser.add_argument(
        "--pair",
        nargs=2,
        action="append",
        metavar=("START", "END"),
        help="开始/结束标记，可重复填写；指定后替换配置中的标记对",
    )
    parser.add_argument("--report", type=Path, help="可选：导出 Excel 统计表 (.xlsx)")
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> Settings:
    """Load the config file and apply command-line overrides."""

    settings = load_settings(args.config)
    pairs = tuple(MarkerPair(start, end) for start, end in args.pair) if args.pair else None
    return settings.with_overrides(
        input_file=args.input,
        backup_file=args.backup,
        marker_pairs=pairs,
        report_path=args.report,
    )


def _count_or_zero(path: Path, pair: MarkerPair) -> PairCount:
    """Count *pair*, logging read errors and treating them as zero."""

    try:
        return count_pair(path, pair)
    except OSError as exc:
        LOGGER.error("[count] 读取失败 %s: %s", path, exc)
        return PairCount(pair=pair, started=0, finished=0)


def count_snapshot(backup: Path, pairs: List[MarkerPair]) -> List[PairCount]:
    """Count every pair against the snapshot and print its report lines."""

    results: List[PairCount] = []
    for pair in pairs:
        result = _count_or_zero(backup, pair)
        LOGGER.debug("[count] %r/%r -> %d/%d", pair.start, pair.end, result.started, result.finished)
        for line in format_pair_report(result):
            print(line, flush=True)
        results.append(result)
    return results


def run_cli(argv: List[str] | None = None) -> int:
    """Snapshot the log, print the counts, and return the exit code."""

    args = parse_cli_arguments(argv)

    try:
        settings = resolve_settings(args)
        setup_logging(settings.log_level, settings.log_file)
    except Exception as exc:
        setup_logging("INFO")
        LOGGER.error("配置读取失败: %s", exc)
        return 1

    backup = settings.backup_path
    try:
        take_snapshot(settings.input_file, backup)
    except OSError as exc:
        LOGGER.error("[snapshot] 备份失败 %s -> %s: %s", settings.input_file, backup, exc)

    results = count_snapshot(backup, list(settings.marker_pairs))

    if settings.report_path is not None:
        try:
            path = write_report_workbook(settings.report_path, build_report_table(results))
            LOGGER.info("写出报表: %s (标记对 %d 个)", path, len(results))
        except Exception as exc:
            LOGGER.warning("写出 Excel 失败: %s", exc)

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(run_cli())
