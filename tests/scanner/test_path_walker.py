import os

import pytest
from pgverify.scanner import path_walker
from pgverify.scanner.block_checker import BlockIntegrityChecker
from pgverify.scanner.path_walker import EntryKind, PathWalker, classify
from pgverify.scanner.report import ReportAggregator
from pgverify.scanner.segment_scanner import SegmentScanner
from pgverify.storage import segment_file


def make_walker(config):
    aggregator = ReportAggregator()
    scanner = SegmentScanner(config, BlockIntegrityChecker(config), aggregator)
    return PathWalker(config, scanner), aggregator


def test_empty_directory(config, base_dir):
    walker, _ = make_walker(config)
    assert walker.scan(str(base_dir)) == 0


def test_sums_across_directories(config, base_dir, write_file, page_factory):
    write_file(base_dir / "1" / "16385", page_factory.corrupt(0))
    write_file(base_dir / "1" / "16386", page_factory.corrupt(0), page_factory.corrupt(1))
    write_file(base_dir / "2" / "16385", page_factory.valid(0))
    write_file(base_dir / "2" / "nested" / "100", page_factory.corrupt(0))
    write_file(base_dir / "PG_VERSION", b'16\n')
    walker, _ = make_walker(config)
    # PG_VERSION 是一个短文件，按截断页计 1
    assert walker.scan(str(base_dir)) == 5


def test_classify(tmp_path):
    (tmp_path / "d").mkdir()
    (tmp_path / "f").write_bytes(b'')
    os.symlink(str(tmp_path / "d"), str(tmp_path / "link"))
    assert classify(str(tmp_path / "d")) is EntryKind.DIRECTORY
    assert classify(str(tmp_path / "f")) is EntryKind.REGULAR_FILE
    assert classify(str(tmp_path / "link")) is EntryKind.OTHER
    with pytest.raises(OSError):
        classify(str(tmp_path / "missing"))


def test_symlinks_are_not_followed(config, base_dir, tmp_path, write_file, page_factory):
    outside = tmp_path / "outside"
    write_file(outside / "16385", page_factory.corrupt(0))
    os.symlink(str(outside), str(base_dir / "linked_dir"))
    os.symlink(str(outside / "16385"), str(base_dir / "linked_file"))
    # 指向自身的链接不会导致死循环
    os.symlink(str(base_dir), str(base_dir / "loop"))
    walker, _ = make_walker(config)
    assert walker.scan(str(base_dir)) == 0


def test_unopenable_file_counts_one_and_siblings_scanned(config, base_dir, write_file, page_factory, monkeypatch):
    bad = write_file(base_dir / "1" / "16385", page_factory.valid(0))
    write_file(base_dir / "1" / "16386", page_factory.corrupt(0), page_factory.corrupt(1))
    real_open = open

    def failing_open(path, *args, **kwargs):
        if path == bad:
            raise PermissionError(13, "Permission denied", path)
        return real_open(path, *args, **kwargs)

    monkeypatch.setattr(segment_file, "open", failing_open, raising=False)
    walker, agg = make_walker(config)
    assert walker.scan(str(base_dir)) == 1 + 2
    assert [u.file_path for u in agg.unreadable] == [bad]


def test_stat_failure_contributes_zero(config, base_dir, write_file, page_factory, monkeypatch):
    vanished = write_file(base_dir / "1" / "16385", page_factory.corrupt(0))
    write_file(base_dir / "1" / "16386", page_factory.corrupt(0))
    real_lstat = os.lstat

    def flaky_lstat(path, *args, **kwargs):
        if path == vanished:
            raise FileNotFoundError(2, "No such file or directory", path)
        return real_lstat(path, *args, **kwargs)

    monkeypatch.setattr(path_walker.os, "lstat", flaky_lstat)
    walker, _ = make_walker(config)
    assert walker.scan(str(base_dir)) == 1


def test_unlistable_directory_contributes_zero(config, base_dir, write_file, page_factory, monkeypatch):
    locked = str(base_dir / "1")
    write_file(base_dir / "1" / "16385", page_factory.corrupt(0))
    write_file(base_dir / "2" / "16385", page_factory.corrupt(0))
    real_scandir = os.scandir

    def flaky_scandir(path):
        if path == locked:
            raise PermissionError(13, "Permission denied", path)
        return real_scandir(path)

    monkeypatch.setattr(path_walker.os, "scandir", flaky_scandir)
    walker, _ = make_walker(config)
    assert walker.scan(str(base_dir)) == 1


def test_entries_skip_dot_entries(config, base_dir, write_file):
    write_file(base_dir / "1" / "16385")
    walker, _ = make_walker(config)
    entries = list(walker.entries(str(base_dir)))
    assert [os.path.basename(e.path) for e in entries] == ["1"]
    assert entries[0].kind is EntryKind.DIRECTORY


def test_deep_tree_does_not_recurse(config, base_dir, write_file, page_factory):
    path = base_dir
    for i in range(200):
        path = path / str(i)
    write_file(path / "16385", page_factory.corrupt(0))
    walker, _ = make_walker(config)
    assert walker.scan(str(base_dir)) == 1
