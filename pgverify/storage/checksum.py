"""
PostgreSQL 数据页校验和算法（checksum_impl.h 的 Python 实现）。

算法要点：
- 页面按 32 个并行的 uint32 累加器做 FNV-1a 变体混合
- 末尾追加两轮全零混合，再将 32 个累加器异或折叠
- 折叠结果与块号异或后映射到 1..65535，0 保留给“未写入校验和”的页面
- 计算时 pd_checksum 字段视为 0
"""

import struct
from typing import Callable

from .page import CHECKSUM_OFFSET

# 校验和提供者：(页面字节, 绝对块号) -> 16 位校验和
ChecksumProvider = Callable[[bytes, int], int]

N_SUMS = 32
FNV_PRIME = 16777619
UINT32_MASK = 0xFFFFFFFF

CHECKSUM_BASE_OFFSETS = (
    0x5B1F36E9, 0xB8525960, 0x02AB50AA, 0x1DE66D2A,
    0x79FF467A, 0x9BB9F8A3, 0x217E7CD2, 0x83E13D2C,
    0xF8D4474F, 0xE39EB970, 0x42C6AE16, 0x993216FA,
    0x7B093B5D, 0x98DAFF3C, 0xF718902A, 0x0B1C9CDB,
    0xE58F764B, 0x187636BC, 0x5D7B3BB1, 0xE73DE7DE,
    0x92BEC979, 0xCCA6C0B2, 0x304A0979, 0x85AA43D4,
    0x783125BB, 0x6CA8EAA2, 0xE407EAC6, 0x4B5CFC3E,
    0x9FBF8C76, 0x15CA20BE, 0xF2CA9FD3, 0x959BD756,
)


def _checksum_comp(checksum: int, value: int) -> int:
    tmp = checksum ^ value
    return ((tmp * FNV_PRIME) ^ (tmp >> 17)) & UINT32_MASK


def checksum_block(page: bytes) -> int:
    """
    计算整页的 32 位折叠校验和。
    页大小必须是 N_SUMS * 4 = 128 字节的整数倍。
    """
    if len(page) % (N_SUMS * 4) != 0:
        raise ValueError(f"Page size {len(page)} is not a multiple of {N_SUMS * 4}")
    words = struct.unpack(f'<{len(page) // 4}I', page)
    result = 0
    for j in range(N_SUMS):
        s = CHECKSUM_BASE_OFFSETS[j]
        # 第 j 个累加器只处理每一行的第 j 个字
        for value in words[j::N_SUMS]:
            s = _checksum_comp(s, value)
        # 两轮全零混合
        s = _checksum_comp(s, 0)
        s = _checksum_comp(s, 0)
        result ^= s
    return result


def pg_checksum_page(page: bytes, block_number: int) -> int:
    """
    计算页面的 16 位校验和，结果总在 1..65535 之间。

    Args:
        page: 完整的页面字节
        block_number: 关系内的绝对块号（跨段文件）

    Returns:
        int: 与 PostgreSQL pg_checksum_page 逐位一致的校验和
    """
    buf = bytearray(page)
    # 计算时 pd_checksum 置零，不影响调用方的缓冲区
    offset = CHECKSUM_OFFSET
    buf[offset:offset + 2] = b'\x00\x00'
    checksum = checksum_block(bytes(buf)) ^ (block_number & UINT32_MASK)
    return (checksum % 65535) + 1
