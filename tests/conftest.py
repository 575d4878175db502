import os

import pytest

from pgverify.config import ScanConfig
from pgverify.storage.checksum import pg_checksum_page
from pgverify.storage.page import HEADER_STRUCT, PAGE_HEADER_SIZE, PAGE_SIZE, RELSEG_SIZE


def build_page(block_number=0, payload=b'', stored_checksum=0, page_size=PAGE_SIZE, lsn=(0, 0)):
    data = bytearray(page_size)
    HEADER_STRUCT.pack_into(
        data, 0,
        lsn[0], lsn[1], stored_checksum, 0,
        PAGE_HEADER_SIZE + len(payload), page_size, page_size, page_size | 4, 0,
    )
    data[PAGE_HEADER_SIZE:PAGE_HEADER_SIZE + len(payload)] = payload
    return bytes(data)


def build_valid_page(absolute_block, payload=b'row data', page_size=PAGE_SIZE):
    data = build_page(absolute_block, payload, page_size=page_size)
    checksum = pg_checksum_page(data, absolute_block)
    return build_page(absolute_block, payload, stored_checksum=checksum, page_size=page_size)


def build_corrupt_page(absolute_block, payload=b'row data', page_size=PAGE_SIZE):
    data = build_page(absolute_block, payload, page_size=page_size)
    checksum = pg_checksum_page(data, absolute_block)
    wrong = checksum % 65535 + 1
    return build_page(absolute_block, payload, stored_checksum=wrong, page_size=page_size)


@pytest.fixture
def page_factory():
    class Factory:
        blank = staticmethod(build_page)
        valid = staticmethod(build_valid_page)
        corrupt = staticmethod(build_corrupt_page)
    return Factory


@pytest.fixture
def write_file():
    def _write(path, *chunks):
        os.makedirs(os.path.dirname(str(path)), exist_ok=True)
        with open(str(path), 'wb') as f:
            for chunk in chunks:
                f.write(chunk)
        return str(path)
    return _write


@pytest.fixture
def base_dir(tmp_path):
    path = tmp_path / "data" / "base"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def config(base_dir):
    return ScanConfig(base_dir=str(base_dir))


@pytest.fixture
def segment_capacity():
    return RELSEG_SIZE
