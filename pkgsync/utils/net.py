"""网络工具 - URL 安全校验 + 默认 HTTP 获取实现"""

from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.request
from urllib.parse import urlparse

from pkgsync import __version__
from pkgsync.core.exceptions import FetchError, ValidationError

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = frozenset(("http", "https"))

DEFAULT_TIMEOUT = 30.0


def validate_url_scheme(url: str, *, context: str = "") -> None:
    """校验 URL 仅使用 http/https，防止 file:// 等非预期协议访问

    Raises:
        ValidationError: URL scheme 不在白名单内
    """
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES:
        label = f" ({context})" if context else ""
        raise ValidationError(
            f"不允许的 URL 协议 '{parsed.scheme}'{label}，"
            f"仅支持 http/https: {url}"
        )


def http_get(url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """GET 指定 URL，返回解码后的文档正文。

    不做重试；超时、网络错误与非 2xx 状态统一转换为 FetchError。
    """
    validate_url_scheme(url, context="release listing")
    logger.debug("GET %s (timeout=%ss)", url, timeout)
    try:
        req = urllib.request.Request(
            url, headers={"User-Agent": f"pkgsync/{__version__}"},
        )
        with urllib.request.urlopen(req, timeout=timeout) as resp:  # nosec B310
            status = getattr(resp, "status", 200)
            if not 200 <= status < 300:
                raise FetchError(f"获取失败: {url} - HTTP {status}", url=url)
            body = resp.read()
            charset = resp.headers.get_content_charset() or "utf-8"
    except urllib.error.HTTPError as e:
        raise FetchError(f"获取失败: {url} - HTTP {e.code}", url=url) from e
    except (urllib.error.URLError, OSError, http.client.HTTPException, ValueError) as e:
        # socket.timeout 是 OSError 子类；IncompleteRead / InvalidURL 属于 HTTPException
        raise FetchError(f"获取失败: {url} - {e}", url=url) from e

    try:
        return body.decode(charset, errors="replace")
    except LookupError:
        logger.warning("未知字符集 %r，按 utf-8 解码: %s", charset, url)
        return body.decode("utf-8", errors="replace")
