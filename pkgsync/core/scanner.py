"""本地软件包树扫描器

职责:
- 列出包目录下的直接子目录（跳过排除项）
- 去除已知前缀得到规范化包名
- 读取 <entry>/<entry>.mk 中的 <IDENT>_VERSION 行
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pkgsync.core.config import Config
from pkgsync.core.exceptions import ConfigError, MissingMetadata
from pkgsync.core.models import LocalPackage

logger = logging.getLogger(__name__)

_VERSION_LINE_RE = re.compile(r"^[A-Z0-9_]+_VERSION\s*=\s*(\S+)\s*$")


def strip_prefix(entry: str, prefixes: list[str], separator: str = "_") -> str:
    """去除首个匹配的 <prefix><separator> 前缀，无匹配时原样返回

    >>> strip_prefix("xapp_xlsfonts", ["xapp", "xlib"])
    'xlsfonts'
    """
    for prefix in prefixes:
        marker = prefix + separator
        if entry.startswith(marker):
            return entry[len(marker):]
    return entry


def read_package_version(mk_file: Path) -> str:
    """读取构建元数据文件中第一条 <IDENT>_VERSION = <version> 行

    Raises:
        MissingMetadata: 文件不可读或没有版本行
    """
    try:
        text = mk_file.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise MissingMetadata(f"无法读取 {mk_file}: {e}") from e
    for line in text.splitlines():
        m = _VERSION_LINE_RE.match(line)
        if m:
            return m.group(1)
    raise MissingMetadata(f"{mk_file} 中没有 _VERSION 行")


def scan_local_tree(package_dir: str | Path, config: Config) -> dict[str, LocalPackage]:
    """扫描本地包目录，返回 {规范化包名: LocalPackage}

    元数据缺失的包版本记为 None，不中断扫描。

    Raises:
        ConfigError: 包目录不存在
    """
    root = Path(package_dir)
    if not root.is_dir():
        raise ConfigError(f"本地包目录不存在: {root}")
    excluded = set(config.local_exclusions)
    packages: dict[str, LocalPackage] = {}

    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        if entry.name in excluded:
            logger.debug("本地排除: %s", entry.name)
            continue
        if not entry.is_dir():
            logger.debug("跳过非目录项: %s", entry.name)
            continue

        name = strip_prefix(entry.name, config.prefixes, config.prefix_separator)
        try:
            version: str | None = read_package_version(entry / f"{entry.name}.mk")
        except MissingMetadata as e:
            logger.info("版本未知: %s", e)
            version = None

        if name in packages:
            logger.warning(
                "本地目录 %s 与 %s 规范化后同名 (%s)，以后者为准",
                packages[name].dir_name, entry.name, name,
            )
        packages[name] = LocalPackage(dir_name=entry.name, version=version)

    logger.info("本地树共 %d 个包: %s", len(packages), root)
    return packages
