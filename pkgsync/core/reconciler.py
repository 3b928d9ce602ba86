"""对账与分类

merge_catalog 以规范化包名合并远程与本地数据；
classify / build_report 是目录的纯函数，重复调用得到相同报告。
"""

from __future__ import annotations

from pkgsync.core.models import (
    Action,
    Catalog,
    LocalPackage,
    PackageRecord,
    RecordKind,
    Report,
    ReportRow,
)
from pkgsync.core.version import compare_versions


def merge_catalog(remote: dict[str, str], local: dict[str, LocalPackage]) -> Catalog:
    """先以远程数据建目录，再用本地数据补全或新增记录"""
    catalog: Catalog = {
        name: PackageRecord(name=name, remote_version=version)
        for name, version in remote.items()
    }
    for name, pkg in local.items():
        record = catalog.get(name)
        if record is not None:
            record.attach_local(pkg)
        else:
            catalog[name] = PackageRecord(
                name=name,
                local_version=pkg.version,
                local_dir_name=pkg.dir_name,
            )
    return catalog


def classify(record: PackageRecord) -> Action:
    """按来源与版本关系确定动作

    两端都存在但本地版本未知时视为需要升级。
    """
    kind = record.kind
    if kind is RecordKind.REMOTE_ONLY:
        return Action.ADD
    if kind is RecordKind.LOCAL_ONLY:
        return Action.REMOVE

    if record.local_version is None:
        return Action.UPGRADE
    order = compare_versions(record.remote_version or "", record.local_version)
    if order > 0:
        return Action.UPGRADE
    if order < 0:
        return Action.MORE_RECENT
    return Action.NONE


def build_report(catalog: Catalog) -> Report:
    """按包名升序生成报告行并统计汇总"""
    report = Report()
    for name in sorted(catalog):
        record = catalog[name]
        action = classify(record)
        report.rows.append(ReportRow(
            name=name,
            local_version=record.local_version,
            remote_version=record.remote_version,
            local_dir_name=record.local_dir_name,
            action=action,
        ))
        report.summary.count(action)
    return report
