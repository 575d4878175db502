"""
段文件扫描：顺序读取一个文件的所有页并统计损坏块数。

计数规则：
- 管理标记文件（pg_internal.init）直接跳过，计 0
- 文件打不开计 1，继续扫描其他文件
- 校验和不一致的整页每页计 1
- 末尾不足一页的短读计 1
- 读取过程中出错，已统计的保留，再计 1
"""

import os
from typing import Optional

from loguru import logger

from pgverify.config import ScanConfig
from pgverify.scanner.block_checker import BlockInspection, BlockIntegrityChecker
from pgverify.scanner.report import CorruptBlock, ReportAggregator
from pgverify.storage.segment_file import SegmentFileReader, absolute_block_number, parse_segment_number


class SegmentScanner:

    def __init__(self, config: ScanConfig, checker: BlockIntegrityChecker,
                 aggregator: Optional[ReportAggregator] = None):
        self.config = config
        self.checker = checker
        self.aggregator = aggregator

    def is_marker_file(self, file_path: str) -> bool:
        return os.path.basename(file_path) in self.config.marker_names

    def scan_file(self, file_path: str) -> int:
        """
        扫描一个段文件，返回该文件的损坏块数。
        """
        if self.is_marker_file(file_path):
            return 0

        if self.config.verbose:
            logger.debug(f"扫描段文件: {file_path}")

        reader = SegmentFileReader(file_path, self.config.page_size)
        try:
            reader.open()
        except OSError as e:
            # 打不开的文件记为一个损坏单位，不影响同目录其他文件
            logger.error(f"{e.strerror or e}: {file_path} cannot be opened")
            if self.aggregator is not None:
                self.aggregator.record_unreadable(file_path, e.strerror or str(e))
            return 1

        corrupted = 0
        with reader:
            try:
                for local_block, page in reader.pages():
                    if len(page) < self.config.page_size:
                        corrupted += 1
                        self._report_truncated(file_path, local_block, len(page))
                        continue
                    inspection = self.checker.inspect(page, local_block, file_path)
                    if self.config.verbose:
                        self._log_inspection(file_path, inspection)
                    if inspection.corrupted:
                        corrupted += 1
                        self._report_corrupted(file_path, inspection)
            except OSError as e:
                # 读到一半出错：已统计的保留，文件剩余部分记为一个损坏单位
                logger.error(f"{e.strerror or e}: {file_path} read failed after {corrupted} corrupted blocks")
                if self.aggregator is not None:
                    self.aggregator.record_unreadable(file_path, e.strerror or str(e))
                corrupted += 1
        return corrupted

    def _report_corrupted(self, file_path: str, inspection: BlockInspection) -> None:
        if self.config.verbose:
            logger.error(
                f"corruption found in {file_path}[{inspection.local_block}], "
                f"expected {inspection.computed_checksum:x}, found {inspection.stored_checksum:x}"
            )
        if self.aggregator is not None:
            self.aggregator.record_block(CorruptBlock(
                file_path=file_path,
                local_block=inspection.local_block,
                absolute_block=inspection.absolute_block,
                stored_checksum=inspection.stored_checksum,
                computed_checksum=inspection.computed_checksum,
            ))

    def _report_truncated(self, file_path: str, local_block: int, size: int) -> None:
        if self.config.verbose:
            logger.error(f"short read in {file_path}[{local_block}]: {size} of {self.config.page_size} bytes")
        if self.aggregator is not None:
            segment_number = parse_segment_number(file_path)
            self.aggregator.record_block(CorruptBlock(
                file_path=file_path,
                local_block=local_block,
                absolute_block=absolute_block_number(segment_number, local_block, self.config.segment_capacity),
                stored_checksum=None,
                computed_checksum=None,
            ))

    def _log_inspection(self, file_path: str, inspection: BlockInspection) -> None:
        h = inspection.header
        logger.debug(
            f"{file_path}[{inspection.local_block}] lsn: {h.lsn_text()}, "
            f"segmentBlockOffset: {inspection.segment_number * self.config.segment_capacity}, "
            f"segmentNumber: {inspection.segment_number}, "
            f"relative blkno: {inspection.local_block}, absolute blkno: {inspection.absolute_block}, "
            f"checksum: {inspection.computed_checksum:x}, pd_checksum: {inspection.stored_checksum:x}, "
            f"pd_flags: {h.flags}, pd_lower: {h.lower}, pd_upper: {h.upper}, "
            f"pd_special: {h.special}, pd_pagesize_version: {h.pagesize_version} "
            f"(page size {h.page_size}, layout version {h.layout_version}), "
            f"pd_prune_xid: {h.prune_xid}"
        )
        logger.debug(f"is_page_corrupted for {file_path}[{inspection.local_block}] returns: {inspection.corrupted}")
