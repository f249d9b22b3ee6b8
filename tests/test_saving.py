"""Tests for loading and saving buffers."""

import os
import stat

import pytest

from ctedit import storage
from ctedit.buffer import Buffer, Line


def contents(buffer):
    return [line.content for line in buffer.lines]


def test_save_joins_lines_without_trailing_newline(tmp_path):
    path = tmp_path / "out.rs"
    buffer = Buffer()
    buffer.lines = [Line("First line"), Line("Second line"), Line("Third line")]

    buffer.save(str(path))

    assert path.read_bytes() == b"First line\nSecond line\nThird line"


def test_save_creates_missing_file(tmp_path):
    path = tmp_path / "new.txt"
    assert not path.exists()

    Buffer().save(str(path))

    assert path.exists()
    assert path.read_bytes() == b""


def test_save_truncates_longer_existing_file(tmp_path):
    path = tmp_path / "out.txt"
    path.write_bytes(b"a much longer previous content\nwith two lines\n")
    buffer = Buffer()
    buffer.lines = [Line("short")]

    buffer.save(str(path))

    assert path.read_bytes() == b"short"


def test_save_failure_propagates_and_keeps_buffer(tmp_path):
    buffer = Buffer()
    buffer.lines = [Line("keep me")]
    missing_dir = tmp_path / "no" / "such" / "dir" / "file.txt"

    with pytest.raises(OSError):
        buffer.save(str(missing_dir))

    assert contents(buffer) == ["keep me"]


@pytest.mark.skipif(os.geteuid() == 0 if hasattr(os, "geteuid") else True,
                    reason="root ignores file permissions")
def test_save_permission_error_propagates(tmp_path):
    path = tmp_path / "readonly.txt"
    path.write_bytes(b"old")
    path.chmod(stat.S_IRUSR)
    try:
        with pytest.raises(PermissionError):
            Buffer().save(str(path))
        assert path.read_bytes() == b"old"
    finally:
        path.chmod(stat.S_IRUSR | stat.S_IWUSR)


def test_load_splits_lines(tmp_path):
    path = tmp_path / "in.txt"
    path.write_bytes(b"Line 1\nLine 2\nLine 3")
    buffer = Buffer()

    buffer.load_file(str(path))

    assert contents(buffer) == ["Line 1", "Line 2", "Line 3"]


def test_load_missing_file_gives_blank_buffer(tmp_path):
    buffer = Buffer()
    buffer.lines = [Line("old"), Line("content")]

    buffer.load_file(str(tmp_path / "missing.txt"))

    assert contents(buffer) == [""]


def test_load_failure_and_empty_file_look_the_same(tmp_path):
    empty = tmp_path / "empty.txt"
    empty.write_bytes(b"")
    from_empty = Buffer()
    from_empty.load_file(str(empty))
    from_failure = Buffer()
    from_failure.load(None)

    assert contents(from_empty) == contents(from_failure) == [""]


def test_load_retokenizes():
    buffer = Buffer()
    buffer.load(b"let a\n42")
    assert [len(line.tags) for line in buffer.lines] == [5, 2]


@pytest.mark.parametrize("data", [
    b"fn main() {\n    println!(\"hi\");\n}",
    b"single line",
    b"a\n\nb",
    b"caf\xc3\xa9 \xff\xfe raw bytes",
])
def test_round_trip_is_byte_exact(tmp_path, data):
    source = tmp_path / "source.rs"
    target = tmp_path / "target.rs"
    source.write_bytes(data)
    buffer = Buffer()

    buffer.load_file(str(source))
    buffer.save(str(target))

    assert target.read_bytes() == data


def test_trailing_newline_is_dropped_on_save(tmp_path):
    path = tmp_path / "f.txt"
    buffer = Buffer()
    buffer.load(b"abc\n")

    buffer.save(str(path))

    assert path.read_bytes() == b"abc"


def test_write_file_overwrites_in_place(tmp_path):
    path = tmp_path / "f.bin"
    path.write_bytes(b"0123456789")
    inode = path.stat().st_ino

    storage.write_file(str(path), b"ab")

    assert path.read_bytes() == b"ab"
    assert path.stat().st_ino == inode


def test_read_file_missing_raises(tmp_path):
    with pytest.raises(OSError):
        storage.read_file(str(tmp_path / "nope"))
