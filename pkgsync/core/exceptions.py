"""统一异常体系

所有业务异常继承 PkgSyncError。
CLI 层据此输出友好提示并以非零状态退出；逐条目的非致命异常
（ParseWarning / MissingMetadata）由抛出方的调用者就地捕获并降级。
"""

from __future__ import annotations


class PkgSyncError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(PkgSyncError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(PkgSyncError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"


class FetchError(PkgSyncError):
    """远程发布清单获取失败（网络错误、超时或非成功状态码）"""

    code = "FETCH_ERROR"

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class ParseWarning(PkgSyncError):
    """清单中的链接不符合 <name>-<version><suffix> 形式，调用方跳过该条目"""

    code = "PARSE_WARNING"


class MissingMetadata(PkgSyncError):
    """本地包缺少可读的版本行，调用方将版本记为未知"""

    code = "MISSING_METADATA"
