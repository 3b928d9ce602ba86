"""pkgsync 命令行接口

不带任何参数运行即执行完整对账流程，报告写到 stdout。
所有选项均可选，用于覆盖配置文件中的对应项。
"""

from __future__ import annotations

import logging

import click

from pkgsync import __version__
from pkgsync.core.config import DEFAULT_CONFIG_PATH, Config
from pkgsync.core.exceptions import PkgSyncError
from pkgsync.core.pipeline import run_pipeline
from pkgsync.core.reporter import available_formats, format_report
from pkgsync.utils.logger import setup_logging_from_env
from pkgsync.utils.yaml_io import dump_yaml

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_path", default=DEFAULT_CONFIG_PATH,
              help="配置文件路径（不存在时使用内置默认值）")
@click.option("--release", default=None, help="上游发布标识，如 X11R7.7")
@click.option("--package-dir", default=None, help="本地软件包目录")
@click.option("--format", "-f", "fmt", default=None,
              type=click.Choice(available_formats()), help="报告格式")
@click.option("--timeout", type=float, default=None, help="网络请求超时（秒）")
@click.option("--show-config", is_flag=True, help="只打印生效配置，不执行对账")
def main(
    config_path: str, release: str | None, package_dir: str | None,
    fmt: str | None, timeout: float | None, show_config: bool,
) -> None:
    """对比上游发布清单与本地软件包树，输出对账报告"""
    setup_logging_from_env()
    try:
        cfg = Config.from_file(config_path).override(
            release=release,
            package_dir=package_dir,
            report_format=fmt,
            fetch_timeout=timeout,
        )
        if show_config:
            click.echo(dump_yaml(cfg.to_dict()), nl=False)
            return
        report = run_pipeline(cfg)
        click.echo(format_report(report, cfg.report_format), nl=False)
    except PkgSyncError as e:
        logger.debug("对账中止", exc_info=True)
        raise click.ClickException(f"[{e.code}] {e}") from e


if __name__ == "__main__":
    main()
