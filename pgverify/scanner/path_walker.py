"""
目录遍历：找出 base 目录下的所有普通文件并交给段文件扫描器。

- 用 lstat 判断类型，符号链接既不进入也不扫描，遍历不会成环
- 单个目录项无法判断类型或目录无法列出时计 0 并记录警告，继续处理兄弟项
- 用显式栈代替递归，目录深度不受调用栈限制
"""

import os
import stat
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List

from loguru import logger

from pgverify.config import ScanConfig
from pgverify.scanner.segment_scanner import SegmentScanner


class EntryKind(Enum):
    DIRECTORY = "directory"
    REGULAR_FILE = "regular-file"
    OTHER = "other"


@dataclass(frozen=True)
class DirectoryEntry:
    path: str
    kind: EntryKind


def classify(path: str) -> EntryKind:
    """不跟随符号链接判断目录项类型，失败时抛出 OSError。"""
    mode = os.lstat(path).st_mode
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryKind.REGULAR_FILE
    return EntryKind.OTHER


class PathWalker:

    def __init__(self, config: ScanConfig, segment_scanner: SegmentScanner):
        self.config = config
        self.segment_scanner = segment_scanner

    def entries(self, directory_path: str) -> Iterator[DirectoryEntry]:
        """
        列出一个目录的直接子项（不含 . 和 ..）。
        无法分类的子项被跳过。
        """
        with os.scandir(directory_path) as it:
            names = sorted(entry.name for entry in it)
        for name in names:
            if name in (os.curdir, os.pardir):
                continue
            path = os.path.join(directory_path, name)
            try:
                kind = classify(path)
            except OSError as e:
                logger.warning(f"无法获取目录项状态，跳过: {path}: {e.strerror or e}")
                continue
            if self.config.verbose:
                logger.debug(f"direntry: {path} - kind: {kind.value}")
            yield DirectoryEntry(path, kind)

    def scan(self, directory_path: str) -> int:
        """
        扫描目录树，返回其中所有段文件的损坏块总数。
        """
        corrupt_pages_found = 0
        pending: List[str] = [directory_path]
        while pending:
            current = pending.pop()
            if self.config.verbose:
                logger.debug(f"scan_directory({current})")
            try:
                children = list(self.entries(current))
            except OSError as e:
                logger.warning(f"无法读取目录，跳过: {current}: {e.strerror or e}")
                continue
            subdirs = []
            for entry in children:
                if entry.kind is EntryKind.DIRECTORY:
                    subdirs.append(entry.path)
                elif entry.kind is EntryKind.REGULAR_FILE:
                    corrupt_pages_found += self.segment_scanner.scan_file(entry.path)
            # 逆序入栈，保持按名称顺序访问子目录
            pending.extend(reversed(subdirs))
        return corrupt_pages_found
