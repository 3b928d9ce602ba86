#!/usr/bin/env python3
"""X.org 发布对账入口脚本

在源码树根目录下运行（需先 pip install -e .）：
    python scripts/xorg_release.py [--config configs/default.yml]

远程清单不可得等致命错误时返回 1。
"""

from __future__ import annotations

import argparse
import logging
import sys

from pkgsync.core.config import DEFAULT_CONFIG_PATH, Config
from pkgsync.core.exceptions import PkgSyncError
from pkgsync.core.pipeline import run_pipeline
from pkgsync.core.reporter import format_report
from pkgsync.utils.logger import setup_logging_from_env

logger = logging.getLogger("xorg_release")


def main() -> int:
    parser = argparse.ArgumentParser(description="对比 X.org 发布清单与本地软件包树")
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="配置文件")
    args = parser.parse_args()

    setup_logging_from_env(default_level="WARNING")

    try:
        cfg = Config.from_file(args.config)
        report = run_pipeline(cfg)
    except PkgSyncError as e:
        logger.debug("对账中止", exc_info=True)
        print(f"错误: {e}", file=sys.stderr)
        return 1
    sys.stdout.write(format_report(report, cfg.report_format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
