"""File mapping and full-write helpers."""

from __future__ import annotations

import dataclasses
import logging
import mmap
import os
from dataclasses import dataclass
from typing import BinaryIO

logger = logging.getLogger(__name__)

_COPY_BUFFER_SIZE = 32768


@dataclass
class MemMapping:
    """A mapped region: ``data`` is the requested part of the ``base`` mapping."""

    data: memoryview
    length: int
    base: mmap.mmap | None
    base_length: int

    def close(self) -> None:
        """Release the mapping; closing twice does nothing."""
        if self.base is None and self.base_length == 0:
            return
        self.data.release()
        if self.base is not None and not self.base.closed:
            self.base.close()
            logger.info("munmap(%d) succeeded", self.base_length)
        self.base = None
        self.base_length = 0

    def copy(self) -> "MemMapping":
        """Return another handle on the same mapped memory."""
        return dataclasses.replace(self)

    def __enter__(self) -> "MemMapping":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _whole(base: mmap.mmap, length: int) -> MemMapping:
    return MemMapping(data=memoryview(base), length=length, base=base, base_length=length)


def create_private_map(length: int) -> MemMapping:
    """Create a private anonymous read-write mapping of ``length`` bytes."""
    if length <= 0:
        raise ValueError(f"cannot map {length} bytes")
    private = getattr(mmap, "MAP_PRIVATE", None)
    anonymous = getattr(mmap, "MAP_ANONYMOUS", None)
    if private is not None and anonymous is not None:
        base = mmap.mmap(-1, length, flags=private | anonymous)
    else:
        base = mmap.mmap(-1, length)
    return _whole(base, length)


def _file_start_and_length(fileobj: BinaryIO) -> tuple[int, int]:
    start = fileobj.tell()
    end = fileobj.seek(0, os.SEEK_END)
    fileobj.seek(start, os.SEEK_SET)
    length = end - start
    if length <= 0:
        logger.info("file is empty")
        raise ValueError("file is empty")
    return start, length


def map_file(fileobj: BinaryIO) -> MemMapping:
    """Map a file from its current offset into private, copy-on-write memory.

    The offset must be a multiple of the mapping granularity.
    """
    start, length = _file_start_and_length(fileobj)
    base = mmap.mmap(fileobj.fileno(), length, access=mmap.ACCESS_COPY, offset=start)
    return _whole(base, length)


def map_file_read_only(fileobj: BinaryIO) -> MemMapping:
    """Map a file from its current offset into read-only memory."""
    start, length = _file_start_and_length(fileobj)
    base = mmap.mmap(fileobj.fileno(), length, access=mmap.ACCESS_READ, offset=start)
    return _whole(base, length)


def map_file_segment(fileobj: BinaryIO, start: int, length: int) -> MemMapping:
    """Map ``length`` bytes at absolute offset ``start`` of a file, read-only."""
    adjust = start % mmap.ALLOCATIONGRANULARITY
    actual_start = start - adjust
    actual_length = length + adjust
    base = mmap.mmap(
        fileobj.fileno(), actual_length, access=mmap.ACCESS_READ, offset=actual_start
    )
    view = memoryview(base)[adjust:adjust + length]
    logger.info(
        "mmap seg (st=%d ln=%d): bl=%d ln=%d", start, length, actual_length, length
    )
    return MemMapping(data=view, length=length, base=base, base_length=actual_length)


def write_fully(fileobj: BinaryIO, data: bytes | bytearray | memoryview, log_msg: str) -> int:
    """Write all of ``data``, retrying after partial writes; return the byte count."""
    view = memoryview(data).cast("B")
    total = len(view)
    while view:
        try:
            written = fileobj.write(view)
        except OSError as exc:
            logger.info("%s: write failed: %s", log_msg, exc)
            raise
        if written is None:
            written = len(view)
        if written != len(view):
            logger.info(
                "%s: partial write (will retry): (%d of %d)", log_msg, written, len(view)
            )
        view = view[written:]
    return total


def copy_file_to_file(out_file: BinaryIO, in_file: BinaryIO, count: int) -> None:
    """Copy exactly ``count`` bytes from ``in_file`` to ``out_file``."""
    while count:
        get_size = min(count, _COPY_BUFFER_SIZE)
        chunk = in_file.read(get_size)
        if len(chunk) != get_size:
            logger.info(
                "copy_file_to_file: copy read failed (%d vs %d)", len(chunk), get_size
            )
            raise EOFError(f"copy read failed ({len(chunk)} vs {get_size})")
        write_fully(out_file, chunk, "copy_file_to_file")
        count -= get_size