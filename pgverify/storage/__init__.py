"""
Storage 子系统：PostgreSQL 页面格式、校验和算法与段文件读取。

模块清单：
- page: 页面常量与页头解析
- checksum: pg_checksum_page 校验和算法
- segment_file: 段号解析、绝对块号与段文件顺序读取
"""

from .checksum import ChecksumProvider, pg_checksum_page
from .page import MARKER_FILE_NAMES, PAGE_HEADER_SIZE, PAGE_SIZE, RELSEG_SIZE, PageHeader, parse_header
from .segment_file import SegmentFileReader, absolute_block_number, parse_segment_number
