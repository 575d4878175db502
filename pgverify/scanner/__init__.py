"""
Scanner 子系统：遍历 base 目录、扫描段文件、判定页面损坏并汇总结果。

模块清单：
- block_checker: 单页校验和比对
- segment_scanner: 单个段文件的顺序扫描
- path_walker: 目录树遍历
- report: 计数汇总与最终结论
- verifier: 一次完整扫描的入口
"""

from .block_checker import BlockInspection, BlockIntegrityChecker
from .path_walker import DirectoryEntry, EntryKind, PathWalker
from .report import CorruptBlock, ReportAggregator, ScanReport, Verdict
from .segment_scanner import SegmentScanner
from .verifier import verify_base_directory
