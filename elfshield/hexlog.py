"""Hex dumps of binary data for diagnostic logging."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

MAX_LINE_LEN = 40960
_ROW = 16
_GROUP = 4
_SEPARATOR = "*" * 64


def _printable(byte: int) -> str:
    return chr(byte) if 32 <= byte <= 126 else "."


def hex_dump(data: bytes | bytearray | memoryview) -> str:
    """Render ``data`` as rows of 16 bytes: offset, hex groups and ASCII.

    The last row is padded with zero bytes up to a full 16 bytes.
    """
    raw = bytes(data)
    padded_len = -(-len(raw) // _ROW) * _ROW
    raw = raw.ljust(padded_len, b"\0")
    lines = []
    for offset in range(0, len(raw), _ROW):
        row = raw[offset:offset + _ROW]
        groups = " ".join(
            row[start:start + _GROUP].hex().upper() for start in range(0, _ROW, _GROUP)
        )
        text = "".join(_printable(byte) for byte in row)
        lines.append(f"{offset:08X}:  {groups}  {text}\n")
    return "".join(lines)


def hex_log(function: str, line_no: int, data: bytes | bytearray | memoryview) -> str | None:
    """Log a hex dump of ``data`` tagged with its call site.

    Returns the dump that was logged, or ``None`` when the data is too
    large to be dumped.
    """
    size = len(data)
    logger.info(_SEPARATOR)
    logger.info("[ hexLog ] %s(%d), Data Size: %d", function, line_no, size)
    if size * 2 >= MAX_LINE_LEN:
        logger.info("[ hexLog ] Org Size Skip: %d", size)
        return None
    dump = hex_dump(data)
    logger.info("%s", dump)
    logger.info(_SEPARATOR)
    return dump