"""核心数据模型

对账目录 (Catalog) 以规范化包名为键，值为 PackageRecord。
记录按来源打标签 (RecordKind)，分类逻辑据此穷举处理。
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum

NOT_AVAILABLE = "N/A"


class RecordKind(str, Enum):
    """记录来源"""
    REMOTE_ONLY = "remote_only"
    LOCAL_ONLY = "local_only"
    BOTH = "both"


class Action(str, Enum):
    """对账动作，值即报告中显示的文字"""
    ADD = "Add to Buildroot"
    REMOVE = "Remove from Buildroot"
    UPGRADE = "Upgrade"
    MORE_RECENT = "More recent"
    NONE = ""

    @property
    def bucket(self) -> str:
        """汇总统计时归入的计数项"""
        return {
            Action.ADD: "add",
            Action.REMOVE: "remove",
            Action.UPGRADE: "upgrade",
        }.get(self, "nothing_to_do")


@dataclass
class LocalPackage:
    """本地树中的单个包目录"""

    dir_name: str                # 去前缀之前的目录名，如 xapp_xlsfonts
    version: str | None = None   # 元数据缺失时为 None


@dataclass
class PackageRecord:
    """对账目录中的单条记录

    至少存在一个来源：远程版本，或本地目录（本地版本可能未知）。
    """

    name: str
    remote_version: str | None = None
    local_version: str | None = None
    local_dir_name: str | None = None

    def __post_init__(self) -> None:
        if self.remote_version is None and self.local_dir_name is None:
            raise ValueError(f"记录 '{self.name}' 既无远程版本也无本地目录")

    @property
    def has_remote(self) -> bool:
        return self.remote_version is not None

    @property
    def has_local(self) -> bool:
        return self.local_dir_name is not None

    @property
    def kind(self) -> RecordKind:
        if self.has_remote and self.has_local:
            return RecordKind.BOTH
        if self.has_remote:
            return RecordKind.REMOTE_ONLY
        return RecordKind.LOCAL_ONLY

    def attach_local(self, local: LocalPackage) -> None:
        """用本地信息扩展记录（远程记录原地补全）"""
        self.local_dir_name = local.dir_name
        self.local_version = local.version


Catalog = dict[str, PackageRecord]


@dataclass
class ReportRow:
    """报告中的一行"""

    name: str
    local_version: str | None
    remote_version: str | None
    local_dir_name: str | None
    action: Action

    def to_dict(self) -> dict[str, str | None]:
        return {
            "name": self.name,
            "local_version": self.local_version,
            "remote_version": self.remote_version,
            "local_dir": self.local_dir_name,
            "action": self.action.value,
        }


@dataclass
class ReportSummary:
    """汇总计数"""

    total: int = 0
    upgrade: int = 0
    add: int = 0
    remove: int = 0
    nothing_to_do: int = 0

    def count(self, action: Action) -> None:
        self.total += 1
        bucket = action.bucket
        setattr(self, bucket, getattr(self, bucket) + 1)

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class Report:
    """对账报告：按包名升序排列的行 + 汇总"""

    rows: list[ReportRow] = field(default_factory=list)
    summary: ReportSummary = field(default_factory=ReportSummary)
