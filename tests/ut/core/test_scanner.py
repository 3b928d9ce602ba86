"""本地软件包树扫描器测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from pkgsync.core.config import Config
from pkgsync.core.exceptions import ConfigError, MissingMetadata
from pkgsync.core.models import LocalPackage
from pkgsync.core.scanner import read_package_version, scan_local_tree, strip_prefix


class TestStripPrefix:
    @pytest.mark.parametrize(("entry", "expected"), [
        ("xapp_xlsfonts", "xlsfonts"),
        ("xlib_libX11", "libX11"),
        ("xdriver_xf86-input-mouse", "xf86-input-mouse"),
        ("xcb-proto", "xcb-proto"),
        ("xapp", "xapp"),
        ("xappfoo", "xappfoo"),
    ])
    def test_default_prefixes(self, entry: str, expected: str) -> None:
        assert strip_prefix(entry, Config().prefixes) == expected

    def test_first_match_wins(self) -> None:
        """前缀列表有序，先匹配者生效"""
        assert strip_prefix("a_b_c", ["a", "a_b"]) == "b_c"
        assert strip_prefix("a_b_c", ["a_b", "a"]) == "c"

    def test_custom_separator(self) -> None:
        assert strip_prefix("xapp-foo", ["xapp"], separator="-") == "foo"
        assert strip_prefix("xapp_foo", ["xapp"], separator="-") == "xapp_foo"


class TestReadPackageVersion:
    def test_first_version_line(self, tmp_path: Path) -> None:
        mk = tmp_path / "xapp_foo.mk"
        mk.write_text(
            "#############\n"
            "# xapp_foo\n"
            "#############\n"
            "XAPP_FOO_VERSION = 1.0.3\n"
            "XAPP_FOO_SOURCE = foo-$(XAPP_FOO_VERSION).tar.bz2\n"
            "XAPP_FOO_VERSION = 9.9\n",
            encoding="utf-8",
        )
        assert read_package_version(mk) == "1.0.3"

    def test_ignores_lowercase_and_indented(self, tmp_path: Path) -> None:
        mk = tmp_path / "foo.mk"
        mk.write_text(
            "foo_VERSION = 0.1\n"
            "  FOO_VERSION = 0.2\n"
            "FOO_VERSION_MAJOR = 3\n"
            "FOO_VERSION=0.4\n",
            encoding="utf-8",
        )
        assert read_package_version(mk) == "0.4"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(MissingMetadata, match="无法读取"):
            read_package_version(tmp_path / "nope.mk")

    def test_no_version_line(self, tmp_path: Path) -> None:
        mk = tmp_path / "foo.mk"
        mk.write_text("FOO_SITE = http://example.com\n", encoding="utf-8")
        with pytest.raises(MissingMetadata, match="_VERSION"):
            read_package_version(mk)


class TestScanLocalTree:
    def test_normalizes_and_reads_versions(self, small_config: Config, make_tree) -> None:
        root = make_tree({"xapp_foo": "1.0", "libfoo": "2.1"})
        assert scan_local_tree(root, small_config) == {
            "foo": LocalPackage(dir_name="xapp_foo", version="1.0"),
            "libfoo": LocalPackage(dir_name="libfoo", version="2.1"),
        }

    def test_exclusions_skipped(self, small_config: Config, make_tree) -> None:
        root = make_tree({"out-of-tree": "1.0", "xapp_bar": "0.5"})
        (root / "Config.in").write_text("source ...\n", encoding="utf-8")
        (root / "vendor.mk").write_text("include ...\n", encoding="utf-8")
        packages = scan_local_tree(root, small_config)
        assert set(packages) == {"bar"}
        assert all(p.dir_name != "out-of-tree" for p in packages.values())

    def test_plain_files_skipped(self, small_config: Config, make_tree) -> None:
        root = make_tree({"xapp_bar": "0.5"})
        (root / "README").write_text("notes\n", encoding="utf-8")
        assert set(scan_local_tree(root, small_config)) == {"bar"}

    def test_missing_metadata_is_not_fatal(self, small_config: Config, make_tree) -> None:
        root = make_tree({"xapp_foo": None, "xapp_bar": "0.5"})
        packages = scan_local_tree(root, small_config)
        assert packages["foo"] == LocalPackage(dir_name="xapp_foo", version=None)
        assert packages["bar"].version == "0.5"

    def test_missing_directory(self, small_config: Config, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="不存在"):
            scan_local_tree(tmp_path / "absent", small_config)

    def test_colliding_names_last_wins(self, make_tree) -> None:
        cfg = Config(prefixes=["xapp", "xlib"], local_exclusions=[])
        root = make_tree({"xapp_foo": "1.0", "xlib_foo": "2.0"})
        assert scan_local_tree(root, cfg) == {
            "foo": LocalPackage(dir_name="xlib_foo", version="2.0"),
        }
