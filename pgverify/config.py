"""
扫描配置。

配置对象在命令行入口构造一次，之后原样传给每个组件，不使用任何全局开关。
"""

import os
from dataclasses import dataclass
from typing import Tuple

from pgverify.errors import ConfigurationError
from pgverify.storage.checksum import N_SUMS
from pgverify.storage.page import MARKER_FILE_NAMES, PAGE_HEADER_SIZE, PAGE_SIZE, RELSEG_SIZE

BASE_DIR_NAME = "base"


@dataclass(frozen=True)
class ScanConfig:
    """
    一次扫描的不可变配置。

    Attributes:
        base_dir: 要扫描的 base 目录
        verbose: 是否输出逐目录/逐页的调试信息
        dump_corrupted: 是否在结论之前列出所有损坏块
        page_size: 页大小（BLCKSZ）
        segment_capacity: 每个段文件的页数（RELSEG_SIZE）
        marker_names: 总是跳过的文件名
    """
    base_dir: str
    verbose: bool = False
    dump_corrupted: bool = False
    page_size: int = PAGE_SIZE
    segment_capacity: int = RELSEG_SIZE
    marker_names: Tuple[str, ...] = MARKER_FILE_NAMES

    def __post_init__(self):
        if self.page_size < PAGE_HEADER_SIZE or self.page_size % (N_SUMS * 4) != 0:
            raise ConfigurationError(
                f"page size {self.page_size} must be a multiple of {N_SUMS * 4} "
                f"and at least {PAGE_HEADER_SIZE} bytes",
                {"page_size": self.page_size},
            )
        if self.segment_capacity <= 0:
            raise ConfigurationError(
                f"segment capacity must be positive, got {self.segment_capacity}",
                {"segment_capacity": self.segment_capacity},
            )

    @classmethod
    def from_datadir(cls, datadir: str, **kwargs) -> 'ScanConfig':
        """由数据目录构造配置，实际扫描的是其中的 base 子目录。"""
        if not datadir:
            raise ConfigurationError("-D argument could not be parsed")
        return cls(base_dir=os.path.join(datadir, BASE_DIR_NAME), **kwargs)
