"""集中配置管理

替代模块级的排除列表 / 前缀列表常量，提供统一的配置入口。
支持从 YAML 文件加载 + 编程式覆盖；核心函数一律显式接收 Config，
便于测试注入更小的样例配置。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any

import yaml

from pkgsync.core.exceptions import ConfigError
from pkgsync.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "configs/default.yml"

_LIST_FIELDS = ("remote_exclusions", "local_exclusions", "prefixes")
_STR_FIELDS = (
    "base_url", "release", "archive_suffix", "prefix_separator",
    "package_dir", "report_format",
)


@dataclass
class Config:
    """对账运行配置"""

    # 远程发布清单
    base_url: str = "http://xorg.freedesktop.org/releases/{release}/src/everything/"
    release: str = "X11R7.7"
    archive_suffix: str = ".tar.bz2"
    fetch_timeout: float = 30.0
    # 老旧硬件驱动，下游刻意不打包
    remote_exclusions: list[str] = field(default_factory=lambda: [
        "xf86-video-suncg6",
        "xf86-video-sunffb",
    ])

    # 本地软件包树
    package_dir: str = "package/x11r7"
    local_exclusions: list[str] = field(default_factory=lambda: [
        "mcookie",                   # 源码直接放在包目录中
        "x11r7.mk",
        "Config.in",
        "xdriver_xf86-input-tslib",  # 树外驱动，不属于 X.org 发布
    ])
    # 顺序敏感：先匹配者生效
    prefixes: list[str] = field(default_factory=lambda: [
        "xapp",
        "xdriver",
        "xfont",
        "xlib",
        "xserver",
        "xutil",
        "xproto",
    ])
    prefix_separator: str = "_"

    # 输出
    report_format: str = "text"

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.validate()

    @property
    def listing_url(self) -> str:
        """填入发布标识后的远程清单 URL"""
        return self.base_url.replace("{release}", self.release)

    def validate(self) -> None:
        for name in _STR_FIELDS:
            if not isinstance(getattr(self, name), str):
                raise ConfigError(f"配置项 {name} 必须是字符串")
        for name in _LIST_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"配置项 {name} 必须是字符串列表")
        if isinstance(self.fetch_timeout, bool) or not isinstance(self.fetch_timeout, (int, float)):
            raise ConfigError("配置项 fetch_timeout 必须是数字")
        if self.fetch_timeout <= 0:
            raise ConfigError(f"fetch_timeout 必须为正数: {self.fetch_timeout}")
        if not self.archive_suffix:
            raise ConfigError("archive_suffix 不能为空")

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_PATH) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, ValueError, OSError) as e:
            raise ConfigError(f"无法加载配置文件 {path}: {e}") from e
        if not data:
            logger.info("未找到配置或配置为空，使用内置默认值: %s", path)
            return cls()
        known = {f.name for f in fields(cls)} - {"extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        if extra:
            logger.debug("未识别的配置项保留在 extra 中: %s", sorted(extra))
        try:
            cfg = cls(**matched)
        except TypeError as e:
            raise ConfigError(f"配置文件 {path} 内容无效: {e}") from e
        cfg.extra = extra
        logger.info("配置已加载: %s", path)
        return cfg

    def override(self, **changes: Any) -> Config:
        """返回应用覆盖项后的新配置，值为 None 的项忽略"""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes) if changes else self

    def to_dict(self) -> dict:
        return asdict(self)

