import io
import mmap

import pytest

from elfshield.sysutil import (
    MemMapping,
    copy_file_to_file,
    create_private_map,
    map_file,
    map_file_read_only,
    map_file_segment,
    write_fully,
)


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.bin"
    path.write_bytes(bytes(range(256)) * 4)
    return path


def test_create_private_map_is_zeroed_and_writable():
    with create_private_map(100) as mapping:
        assert mapping.length == 100
        assert bytes(mapping.data) == bytes(100)
        mapping.data[5] = 7
        assert mapping.data[5] == 7


@pytest.mark.parametrize("length", [0, -4])
def test_create_private_map_rejects_bad_length(length):
    with pytest.raises(ValueError):
        create_private_map(length)


def test_map_file_reads_whole_file(sample_file):
    content = sample_file.read_bytes()
    with open(sample_file, "rb") as handle, map_file(handle) as mapping:
        assert mapping.length == len(content)
        assert bytes(mapping.data) == content


def test_map_file_is_copy_on_write(sample_file):
    content = sample_file.read_bytes()
    with open(sample_file, "rb") as handle, map_file(handle) as mapping:
        mapping.data[0] = 0xAA
        assert mapping.data[0] == 0xAA
    assert sample_file.read_bytes() == content


def test_map_file_starts_at_current_offset(tmp_path):
    granularity = mmap.ALLOCATIONGRANULARITY
    path = tmp_path / "big.bin"
    content = bytes(granularity) + b"tail-bytes"
    path.write_bytes(content)
    with open(path, "rb") as handle:
        handle.seek(granularity)
        with map_file(handle) as mapping:
            assert bytes(mapping.data) == content[granularity:]
        assert handle.tell() == granularity


def test_map_file_empty_raises(tmp_path):
    path = tmp_path / "empty.bin"
    path.write_bytes(b"")
    with open(path, "rb") as handle:
        with pytest.raises(ValueError):
            map_file(handle)


def test_map_file_read_only_rejects_writes(sample_file):
    content = sample_file.read_bytes()
    with open(sample_file, "rb") as handle, map_file_read_only(handle) as mapping:
        assert bytes(mapping.data) == content
        with pytest.raises(TypeError):
            mapping.data[0] = 1


def test_map_file_segment_unaligned(sample_file):
    content = sample_file.read_bytes()
    with open(sample_file, "rb") as handle, map_file_segment(handle, 5, 10) as mapping:
        assert bytes(mapping.data) == content[5:15]
        assert mapping.length == 10
        assert mapping.base_length == 15


def test_close_is_idempotent_and_clears_mapping():
    mapping = create_private_map(16)
    mapping.close()
    mapping.close()
    assert mapping.base is None
    assert mapping.base_length == 0


def test_copy_shares_memory():
    mapping = create_private_map(8)
    duplicate = mapping.copy()
    assert isinstance(duplicate, MemMapping)
    mapping.data[3] = 9
    assert duplicate.data[3] == 9
    duplicate.close()
    mapping.close()
    assert mapping.base_length == 0


class _TrickleWriter:
    def __init__(self, step):
        self.step = step
        self.buffer = bytearray()
        self.calls = 0

    def write(self, data):
        self.calls += 1
        piece = bytes(data[: self.step])
        self.buffer += piece
        return len(piece)


class _FailingWriter:
    def write(self, data):
        raise OSError("disk full")


def test_write_fully_to_bytesio():
    out = io.BytesIO()
    assert write_fully(out, b"hello world", "test") == 11
    assert out.getvalue() == b"hello world"


def test_write_fully_retries_partial_writes():
    writer = _TrickleWriter(3)
    data = bytes(range(50))
    assert write_fully(writer, data, "trickle") == len(data)
    assert bytes(writer.buffer) == data
    assert writer.calls == -(-len(data) // 3)


def test_write_fully_propagates_errors():
    with pytest.raises(OSError):
        write_fully(_FailingWriter(), b"abc", "fail")


def test_copy_file_to_file_copies_count_bytes():
    data = bytes(range(256)) * 300
    source = io.BytesIO(data)
    target = io.BytesIO()
    copy_file_to_file(target, source, 70000)
    assert target.getvalue() == data[:70000]
    assert source.tell() == 70000


def test_copy_file_to_file_short_input_raises():
    with pytest.raises(EOFError):
        copy_file_to_file(io.BytesIO(), io.BytesIO(b"short"), 10)


def test_copy_file_to_file_zero_count_copies_nothing():
    target = io.BytesIO()
    copy_file_to_file(target, io.BytesIO(b"data"), 0)
    assert target.getvalue() == b""