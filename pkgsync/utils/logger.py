"""pkgsync 日志配置

诊断信息一律写 stderr，stdout 只留给对账报告。
CLI 与脚本入口都通过 setup_logging_from_env 读取同一组环境变量:
  PKGSYNC_LOG_LEVEL  日志级别，默认 INFO
  PKGSYNC_LOG_JSON   为 "1" 时输出 JSON 行（CI 消费）
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone

from pkgsync.core.exceptions import FetchError, PkgSyncError

LEVEL_ENV_VAR = "PKGSYNC_LOG_LEVEL"
JSON_ENV_VAR = "PKGSYNC_LOG_JSON"

TEXT_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"


def _error_context(record: logging.LogRecord) -> dict[str, str]:
    """从 exc_info 中的 PkgSyncError 提取错误码与出错 URL"""
    exc = record.exc_info[1] if record.exc_info else None
    if not isinstance(exc, PkgSyncError):
        return {}
    context = {"error_code": exc.code}
    if isinstance(exc, FetchError) and exc.url:
        context["url"] = exc.url
    return context


class JSONFormatter(logging.Formatter):
    """每条日志一行 JSON

    携带 PkgSyncError 的记录额外输出 error_code（FetchError 另带 url），
    流水线可据此区分网络失败与配置错误。
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "line": record.lineno,
        }
        log_entry.update(_error_context(record))
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """配置根日志器：单个 stderr handler，未知级别回退到 INFO"""
    reset_logging()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)


def setup_logging_from_env(default_level: str = "INFO") -> None:
    """按 PKGSYNC_LOG_LEVEL / PKGSYNC_LOG_JSON 配置日志"""
    setup_logging(
        level=os.getenv(LEVEL_ENV_VAR, default_level),
        json_output=os.getenv(JSON_ENV_VAR, "") == "1",
    )


def reset_logging() -> None:
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
