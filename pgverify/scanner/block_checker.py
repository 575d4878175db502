"""
单个数据页的完整性判定。

判定规则：
    corrupted <=> stored != 0 and stored != computed
stored == 0 表示该页从未写入过校验和（例如新分配的页），总是视为正常。
"""

from dataclasses import dataclass

from pgverify.config import ScanConfig
from pgverify.storage.checksum import ChecksumProvider, pg_checksum_page
from pgverify.storage.page import PageHeader, parse_header
from pgverify.storage.segment_file import absolute_block_number, parse_segment_number

# 页头中表示“未设置校验和”的值
CHECKSUM_UNSET = 0


@dataclass(frozen=True)
class BlockInspection:
    """一次页面校验的全部中间结果，供调用方输出诊断信息。"""
    segment_number: int
    local_block: int
    absolute_block: int
    stored_checksum: int
    computed_checksum: int
    header: PageHeader
    corrupted: bool


def is_checksum_mismatch(stored: int, computed: int) -> bool:
    return stored != CHECKSUM_UNSET and stored != computed


class BlockIntegrityChecker:
    """
    根据页面所在段文件与段内块号计算绝对块号，
    调用校验和提供者并与页头中的 pd_checksum 比较。
    本类没有副作用，不输出任何日志。
    """

    def __init__(self, config: ScanConfig, checksum: ChecksumProvider = pg_checksum_page):
        self.config = config
        self.checksum = checksum

    def inspect(self, page: bytes, local_block: int, file_path: str) -> BlockInspection:
        if len(page) != self.config.page_size:
            raise ValueError(f"Page size {len(page)} does not match configured size {self.config.page_size}")
        segment_number = parse_segment_number(file_path)
        absolute = absolute_block_number(segment_number, local_block, self.config.segment_capacity)
        computed = self.checksum(page, absolute)
        header = parse_header(page)
        return BlockInspection(
            segment_number=segment_number,
            local_block=local_block,
            absolute_block=absolute,
            stored_checksum=header.checksum,
            computed_checksum=computed,
            header=header,
            corrupted=is_checksum_mismatch(header.checksum, computed),
        )

    def is_corrupted(self, page: bytes, local_block: int, file_path: str) -> bool:
        return self.inspect(page, local_block, file_path).corrupted
