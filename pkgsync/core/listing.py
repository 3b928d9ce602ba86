"""远程发布清单获取器

职责:
- 通过注入的 HTTP 获取函数拉取目录列表页面
- 用 HTML 解析器提取全部 <a href>
- 按归档后缀过滤，解析 <name>-<version><suffix>
- 应用远程排除列表
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from functools import lru_cache
from html.parser import HTMLParser
from urllib.parse import unquote, urlsplit

from pkgsync.core.config import Config
from pkgsync.core.exceptions import ParseWarning
from pkgsync.utils.net import http_get

logger = logging.getLogger(__name__)

# (url, timeout) -> 文档正文
HttpFetch = Callable[[str, float], str]


class AnchorExtractor(HTMLParser):
    """收集文档中所有 <a> 标签的 href 属性，保持文档顺序"""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.hrefs: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag != "a":
            return
        for key, value in attrs:
            if key == "href" and value:
                self.hrefs.append(value.strip())
                break


def extract_hrefs(document: str) -> list[str]:
    """提取文档中全部锚点的 href，缺少 href 的锚点忽略"""
    parser = AnchorExtractor()
    parser.feed(document)
    parser.close()
    return parser.hrefs


@lru_cache(maxsize=8)
def archive_pattern(suffix: str) -> re.Pattern[str]:
    """<name>-<version><suffix> 的正则，按后缀缓存"""
    return re.compile(
        r"(?P<name>.+)-(?P<version>[0-9][0-9.]*)" + re.escape(suffix),
    )


def parse_archive_name(href: str, suffix: str) -> tuple[str, str]:
    """从链接中解析 (包名, 版本)

    只看链接路径的最后一段，查询串与片段忽略。

    Raises:
        ParseWarning: 链接不符合 <name>-<version><suffix> 形式
    """
    filename = unquote(urlsplit(href).path.rstrip("/").rsplit("/", 1)[-1])
    m = archive_pattern(suffix).fullmatch(filename)
    if not m:
        raise ParseWarning(f"链接不符合归档命名格式: {href}")
    # 形如 foo-1.2..tar.bz2 的版本末尾点号不属于版本
    version = m.group("version").rstrip(".")
    return m.group("name"), version


def parse_listing(document: str, config: Config) -> dict[str, str]:
    """解析目录列表页面，返回 {包名: 远程版本}

    同名包多次出现时以文档中最后一次为准（已记录为既定行为）。
    """
    excluded = set(config.remote_exclusions)
    packages: dict[str, str] = {}
    for href in extract_hrefs(document):
        if not href.endswith(config.archive_suffix):
            continue
        try:
            name, version = parse_archive_name(href, config.archive_suffix)
        except ParseWarning as e:
            logger.debug("跳过: %s", e)
            continue
        if name in excluded:
            logger.debug("远程排除: %s", name)
            continue
        if name in packages and packages[name] != version:
            logger.warning(
                "远程清单中 %s 出现多个版本 (%s, %s)，以最后出现的为准",
                name, packages[name], version,
            )
        packages[name] = version
    return packages


def fetch_remote_packages(
    config: Config, fetch: HttpFetch | None = None,
) -> dict[str, str]:
    """拉取并解析远程发布清单

    Raises:
        FetchError: 网络失败、超时或非成功状态码
    """
    fetch = fetch or http_get
    url = config.listing_url
    logger.info("获取远程发布清单: %s", url)
    document = fetch(url, config.fetch_timeout)
    packages = parse_listing(document, config)
    logger.info("远程清单共 %d 个包 (%d 字节)", len(packages), len(document))
    return packages
