#!/usr/bin/env python3
"""一键运行：备份 out.txt 并统计开始/结束标记的行数差。

用法：
  python index.py

行为：
  - 从根目录 `config.yml` 读取参数（文件不存在时使用内置默认值）
  - 将 out.txt 复制为 out.txt.bak，之后只统计快照
  - 对每组标记输出 starting lines / finished lines / difference 三行
"""

from __future__ import annotations

from inflight_counter.cli import run_cli


def main() -> int:
    """Run with config.yml only, no command-line flags."""

    return run_cli([])


if __name__ == "__main__":
    raise SystemExit(main())
