"""宽松版本比较

点分数字段逐段比较，缺失的尾部段按 0 处理（"2.0" == "2.0.0"）。
数字段按数值比较；遇到非数字段时退回字符串字典序，而不是报错。
"""

from __future__ import annotations

import re

_COMPONENT_RE = re.compile(r"\d+|[A-Za-z]+")


def split_version(version: str) -> list[int | str]:
    """拆分为数字 / 字母段，分隔符（. _ - 等）丢弃

    >>> split_version("1.10_rc2")
    [1, 10, 'rc', 2]
    """
    return [
        int(part) if part.isdigit() else part
        for part in _COMPONENT_RE.findall(version)
    ]


def _compare_component(a: int | str, b: int | str) -> int:
    if isinstance(a, int) and isinstance(b, int):
        return (a > b) - (a < b)
    sa, sb = str(a), str(b)
    return (sa > sb) - (sa < sb)


def compare_versions(a: str, b: str) -> int:
    """比较两个版本字符串，返回 -1 / 0 / 1"""
    left, right = split_version(a), split_version(b)
    width = max(len(left), len(right))
    left += [0] * (width - len(left))
    right += [0] * (width - len(right))
    for x, y in zip(left, right):
        result = _compare_component(x, y)
        if result:
            return result
    return 0

