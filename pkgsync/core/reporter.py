"""对账报告格式化 - Strategy 模式

每种输出格式实现 ReportFormatter 接口，通过注册制工厂调用。
新增格式只需继承 ReportFormatter 并注册即可。
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod

from pkgsync.core.exceptions import ValidationError
from pkgsync.core.models import NOT_AVAILABLE, Report

logger = logging.getLogger(__name__)

ROW_FORMAT = "%40s | %15s | %15s | %-30s"
STAT_FORMAT = "%40s : %3d"
VERSION_WIDTH = 15


class ReportFormatter(ABC):
    """报告格式化策略基类"""

    @abstractmethod
    def format(self, report: Report) -> str:
        """将报告格式化为字符串"""


class TextFormatter(ReportFormatter):
    """定宽表格 + 汇总块"""

    def format(self, report: Report) -> str:
        separator = ROW_FORMAT % ("-" * 40, "-" * 15, "-" * 15, "-" * 30)
        lines = [
            ROW_FORMAT % ("Package name", "Vers in BR", "Vers in X.org", "Action"),
            separator,
        ]
        for row in report.rows:
            local = (row.local_version or NOT_AVAILABLE).center(VERSION_WIDTH)
            remote = (row.remote_version or NOT_AVAILABLE).center(VERSION_WIDTH)
            lines.append(ROW_FORMAT % (row.name, local, remote, row.action.value))
        lines.append(separator)

        s = report.summary
        lines += [
            STAT_FORMAT % ("Total number of packages", s.total),
            STAT_FORMAT % ("Packages to upgrade", s.upgrade),
            STAT_FORMAT % ("Packages to add", s.add),
            STAT_FORMAT % ("Packages to remove", s.remove),
            STAT_FORMAT % ("Packages with nothing to do", s.nothing_to_do),
        ]
        return "\n".join(lines) + "\n"


class JSONFormatter(ReportFormatter):
    def format(self, report: Report) -> str:
        return json.dumps(
            {
                "summary": report.summary.to_dict(),
                "packages": [row.to_dict() for row in report.rows],
            },
            indent=2,
        ) + "\n"


# =========================================================================
# 注册制工厂
# =========================================================================

_formatters: dict[str, type[ReportFormatter]] = {
    "text": TextFormatter,
    "json": JSONFormatter,
}


def register_formatter(name: str, cls: type[ReportFormatter]) -> None:
    """注册自定义报告格式"""
    _formatters[name] = cls


def available_formats() -> list[str]:
    return sorted(_formatters)


def format_report(report: Report, fmt: str = "text") -> str:
    """按指定格式渲染报告"""
    formatter_cls = _formatters.get(fmt)
    if formatter_cls is None:
        raise ValidationError(
            f"不支持的格式: {fmt}（可用: {available_formats()}）",
        )
    logger.debug("渲染报告: format=%s rows=%d", fmt, len(report.rows))
    return formatter_cls().format(report)
