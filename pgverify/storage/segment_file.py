"""
段文件（segment file）的只读访问与段号解析。

PostgreSQL 中每个关系的数据按 RELSEG_SIZE 页切分为多个段文件：
  base/<dboid>/<relfilenode>       -> 段 0
  base/<dboid>/<relfilenode>.1     -> 段 1
  base/<dboid>/<relfilenode>_fsm.2 -> 段 2
"""

import os
from typing import BinaryIO, Iterator, Optional, Tuple

from .page import PAGE_SIZE, RELSEG_SIZE


def parse_segment_number(file_path: str) -> int:
    """
    从文件名末尾的连续十进制数字（0-9）解析段号。

    - 末尾没有数字的文件视为段 0（如 "PG_VERSION"、"16385_vm"）
    - 文件名全部为数字时就是关系的第一个段，段号为 0（如 "16385"）
    """
    name = os.path.basename(file_path)
    start = len(name)
    while start > 0 and '0' <= name[start - 1] <= '9':
        start -= 1
    if start == 0 or start == len(name):
        return 0
    return int(name[start:])


def absolute_block_number(segment_number: int, local_block: int, segment_capacity: int = RELSEG_SIZE) -> int:
    """段内相对块号换算为关系内的绝对块号。"""
    if segment_number < 0 or local_block < 0:
        raise ValueError("Segment number and block number must be non-negative.")
    return segment_number * segment_capacity + local_block


class SegmentFileReader:
    """
    以只读方式顺序读取一个段文件的全部页面。
    文件句柄只在 with 语句内有效，退出时一定会被关闭。
    """

    def __init__(self, path: str, page_size: int = PAGE_SIZE):
        self.path = path
        self.page_size = page_size
        self._file: Optional[BinaryIO] = None

    def open(self) -> 'SegmentFileReader':
        # 打开失败直接抛出 OSError，由调用方决定如何计数
        self._file = open(self.path, 'rb')
        return self

    def pages(self) -> Iterator[Tuple[int, bytes]]:
        """
        按顺序产出 (相对块号, 页面字节)。
        最后一次读取不足一页时原样产出这段短数据，由调用方判定为截断。
        """
        if self._file is None:
            raise RuntimeError("Segment file is not open")
        block_number = 0
        while True:
            data = self._file.read(self.page_size)
            if not data:
                return
            yield block_number, data
            if len(data) < self.page_size:
                return
            block_number += 1

    def close(self) -> None:
        if self._file and not self._file.closed:
            self._file.close()
        self._file = None

    @property
    def closed(self) -> bool:
        return self._file is None

    def __enter__(self) -> 'SegmentFileReader':
        if self._file is None:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
