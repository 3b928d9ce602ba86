"""对账流水线

远程清单获取 → 本地树扫描 → 合并 → 报告。单线程顺序执行，
除一次网络请求与文件读取外无阻塞点，运行结束后不保留状态。
"""

from __future__ import annotations

import logging
from pathlib import Path

from pkgsync.core.config import Config
from pkgsync.core.listing import HttpFetch, fetch_remote_packages
from pkgsync.core.models import Report
from pkgsync.core.reconciler import build_report, merge_catalog
from pkgsync.core.scanner import scan_local_tree

logger = logging.getLogger(__name__)


def run_pipeline(
    config: Config,
    fetch: HttpFetch | None = None,
    package_dir: str | Path | None = None,
) -> Report:
    """执行完整对账流程并返回报告

    参数:
        config: 运行配置
        fetch: HTTP 获取函数 (url, timeout) -> 正文，默认 urllib 实现
        package_dir: 覆盖 config.package_dir

    Raises:
        FetchError: 远程清单不可得（唯一的致命运行时错误）
        ConfigError: 本地包目录不存在
    """
    remote = fetch_remote_packages(config, fetch=fetch)
    local = scan_local_tree(package_dir or config.package_dir, config)
    catalog = merge_catalog(remote, local)
    report = build_report(catalog)
    s = report.summary
    logger.info(
        "对账完成: 共 %d, 升级 %d, 新增 %d, 移除 %d, 无需处理 %d",
        s.total, s.upgrade, s.add, s.remove, s.nothing_to_do,
    )
    return report
