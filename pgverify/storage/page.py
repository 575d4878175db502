"""
PostgreSQL 页面格式与页头解析。

遵循规范：
- 常量与页头布局与 PostgreSQL bufpage.h 保持一致（小端序）
- 只读解析，不修改磁盘上的任何页面
"""

import struct
from dataclasses import dataclass

# BLCKSZ，默认 8KB 页
PAGE_SIZE = 8192
# RELSEG_SIZE，每个段文件的页数（1GB / 8KB）
RELSEG_SIZE = 131072
# relcache 初始化文件，服务器启动时会重建，校验和总是对不上
MARKER_FILE_NAMES = ("pg_internal.init",)

# 页头格式：pd_lsn(4+4字节), pd_checksum(2字节), pd_flags(2字节),
# pd_lower(2字节), pd_upper(2字节), pd_special(2字节),
# pd_pagesize_version(2字节), pd_prune_xid(4字节)
HEADER_STRUCT = struct.Struct('<IIHHHHHHI')  # 4+4+2*6+4=24字节
PAGE_HEADER_SIZE = HEADER_STRUCT.size
CHECKSUM_OFFSET = 8
CHECKSUM_STRUCT = struct.Struct('<H')


@dataclass(frozen=True)
class PageHeader:
    """
    页头各字段的只读视图。
    只有 checksum 参与损坏判定，其余字段仅用于诊断输出。
    """
    lsn_xlogid: int
    lsn_xrecoff: int
    checksum: int
    flags: int
    lower: int
    upper: int
    special: int
    pagesize_version: int
    prune_xid: int

    @property
    def lsn(self) -> int:
        return (self.lsn_xlogid << 32) | self.lsn_xrecoff

    @property
    def page_size(self) -> int:
        return self.pagesize_version & 0xFF00

    @property
    def layout_version(self) -> int:
        return self.pagesize_version & 0x00FF

    def lsn_text(self) -> str:
        """按 PostgreSQL 的 %X/%X 格式显示 LSN。"""
        return f"{self.lsn_xlogid:X}/{self.lsn_xrecoff:X}"


def read_stored_checksum(page: bytes) -> int:
    """直接从页面缓冲区读取 pd_checksum。"""
    return CHECKSUM_STRUCT.unpack_from(page, CHECKSUM_OFFSET)[0]


def parse_header(page: bytes) -> PageHeader:
    if len(page) < PAGE_HEADER_SIZE:
        raise ValueError(f"Page of {len(page)} bytes is shorter than the {PAGE_HEADER_SIZE}-byte header")
    return PageHeader(*HEADER_STRUCT.unpack_from(page, 0))
