"""
一次完整扫描的入口：校验 base 目录、组装各组件并返回最终报告。
"""

import os
import stat

from loguru import logger

from pgverify.config import ScanConfig
from pgverify.errors import BaseDirectoryError
from pgverify.scanner.block_checker import BlockIntegrityChecker
from pgverify.scanner.path_walker import PathWalker
from pgverify.scanner.report import ReportAggregator, ScanReport
from pgverify.scanner.segment_scanner import SegmentScanner
from pgverify.storage.checksum import ChecksumProvider, pg_checksum_page


def check_base_directory(path: str) -> None:
    """base 目录必须存在且本身是目录（不接受指向目录的符号链接）。"""
    try:
        mode = os.lstat(path).st_mode
    except OSError as e:
        raise BaseDirectoryError(path) from e
    if not stat.S_ISDIR(mode):
        raise BaseDirectoryError(path)


def verify_base_directory(config: ScanConfig, checksum: ChecksumProvider = pg_checksum_page) -> ScanReport:
    """
    扫描 config.base_dir 下的所有段文件。

    Raises:
        BaseDirectoryError: base 目录不存在或不是目录，此时不会开始扫描
    """
    check_base_directory(config.base_dir)

    aggregator = ReportAggregator()
    checker = BlockIntegrityChecker(config, checksum)
    scanner = SegmentScanner(config, checker, aggregator)
    walker = PathWalker(config, scanner)

    logger.info(f"开始扫描: {config.base_dir}")
    aggregator.add(walker.scan(config.base_dir))
    report = aggregator.finish()
    logger.info(f"扫描完成: 损坏块 {report.total}, 无法读取的文件 {len(report.unreadable)}")
    return report
