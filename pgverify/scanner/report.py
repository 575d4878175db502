"""
扫描结果汇总。

各层扫描返回的损坏计数自底向上相加，扫描结束时映射为最终结论：
    Scanning -> Clean        (total == 0)
    Scanning -> Corrupt(n)   (total == n > 0)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class Verdict(Enum):
    """扫描结论"""
    CLEAN = "CLEAN"
    CORRUPT = "CORRUPT"


@dataclass(frozen=True)
class CorruptBlock:
    """一个损坏块的记录。截断的尾页没有计算出的校验和。"""
    file_path: str
    local_block: int
    absolute_block: int
    stored_checksum: Optional[int]
    computed_checksum: Optional[int]

    @property
    def truncated(self) -> bool:
        return self.computed_checksum is None


@dataclass(frozen=True)
class UnreadableFile:
    file_path: str
    reason: str


@dataclass(frozen=True)
class ScanReport:
    """一次扫描的最终结果，不可变。"""
    total: int
    findings: Tuple[CorruptBlock, ...] = ()
    unreadable: Tuple[UnreadableFile, ...] = ()

    @property
    def verdict(self) -> Verdict:
        return Verdict.CORRUPT if self.total > 0 else Verdict.CLEAN

    @property
    def exit_code(self) -> int:
        return 1 if self.verdict is Verdict.CORRUPT else 0

    def summary_line(self) -> str:
        if self.verdict is Verdict.CORRUPT:
            return f"CORRUPTION FOUND: {self.total}"
        return "NO CORRUPTION FOUND"


@dataclass
class ReportAggregator:
    """
    累加损坏计数并收集明细。
    计数只做加法，与遍历顺序无关。
    """
    total: int = 0
    findings: List[CorruptBlock] = field(default_factory=list)
    unreadable: List[UnreadableFile] = field(default_factory=list)

    def add(self, count: int) -> int:
        if count < 0:
            raise ValueError(f"Corrupted block count cannot be negative: {count}")
        self.total += count
        return self.total

    def record_block(self, block: CorruptBlock) -> None:
        self.findings.append(block)

    def record_unreadable(self, file_path: str, reason: str) -> None:
        self.unreadable.append(UnreadableFile(file_path, reason))

    def finish(self) -> ScanReport:
        return ScanReport(
            total=self.total,
            findings=tuple(self.findings),
            unreadable=tuple(self.unreadable),
        )
