"""共享 fixture - 小型配置、本地包树构造器、假 HTTP 获取函数"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from pkgsync.core.config import Config


def listing_page(*hrefs: str) -> str:
    """构造一个 Apache 风格的目录列表页面"""
    rows = "\n".join(
        f'<tr><td><a href="{h}">{h}</a></td><td>2012-06-06 12:00</td></tr>'
        for h in hrefs
    )
    return (
        "<!DOCTYPE HTML PUBLIC \"-//W3C//DTD HTML 3.2 Final//EN\">\n"
        "<html><head><title>Index of /releases/X11R7.7/src/everything</title></head>\n"
        "<body><h1>Index of /releases/X11R7.7/src/everything</h1>\n"
        '<table><tr><th><a href="?C=N;O=D">Name</a></th></tr>\n'
        '<tr><td><a href="/releases/X11R7.7/src/">Parent Directory</a></td></tr>\n'
        f"{rows}\n"
        "</table></body></html>\n"
    )


class FakeFetch:
    """记录调用参数并返回固定正文的 HTTP 获取替身"""

    def __init__(self, body: str = "", error: Exception | None = None) -> None:
        self.body = body
        self.error = error
        self.calls: list[tuple[str, float]] = []

    def __call__(self, url: str, timeout: float) -> str:
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.body


@pytest.fixture()
def small_config(tmp_path: Path) -> Config:
    """只带一个前缀与少量排除项的配置"""
    return Config(
        base_url="http://mirror.test/releases/{release}/src/everything/",
        release="R1",
        archive_suffix=".tar.bz2",
        remote_exclusions=["legacy-driver"],
        local_exclusions=["Config.in", "vendor.mk", "out-of-tree"],
        prefixes=["xapp"],
        package_dir=str(tmp_path / "pkgs"),
    )


@pytest.fixture()
def make_tree(tmp_path: Path) -> Callable[..., Path]:
    """构造本地包树

    用法:
        root = make_tree({"xapp_foo": "1.0", "xlib_bar": None})
        值为 None 时只建目录不写 .mk 文件
    """

    def _make(packages: dict[str, str | None], root: Path | None = None) -> Path:
        root = root or tmp_path / "pkgs"
        root.mkdir(parents=True, exist_ok=True)
        for entry, version in packages.items():
            pkg_dir = root / entry
            pkg_dir.mkdir()
            if version is not None:
                ident = entry.upper().replace("-", "_")
                (pkg_dir / f"{entry}.mk").write_text(
                    f"{ident}_VERSION = {version}\n"
                    f"{ident}_SOURCE = {entry}-$({ident}_VERSION).tar.bz2\n",
                    encoding="utf-8",
                )
        return root

    return _make


@pytest.fixture()
def listing() -> Callable[..., str]:
    """目录列表页面工厂: listing("foo-1.2.tar.bz2", ...)"""
    return listing_page


@pytest.fixture()
def fake_fetch() -> type[FakeFetch]:
    """假 HTTP 获取函数类: fake_fetch(body) / fake_fetch(error=FetchError(...))"""
    return FakeFetch
