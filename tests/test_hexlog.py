import logging

import pytest

from elfshield.hexlog import MAX_LINE_LEN, hex_dump, hex_log


def test_short_data_is_padded_to_a_full_row():
    assert hex_dump(b"ABC") == (
        "00000000:  41424300 00000000 00000000 00000000  ABC.............\n"
    )


def test_empty_data_gives_empty_dump():
    assert hex_dump(b"") == ""


@pytest.mark.parametrize("size", [1, 15, 16, 17, 32, 100])
def test_row_count_and_offsets(size):
    lines = hex_dump(bytes(range(size))).splitlines()
    assert len(lines) == -(-size // 16)
    for index, line in enumerate(lines):
        assert line.startswith(f"{index * 16:08X}:  ")


def test_ascii_column_masks_unprintable_bytes():
    data = b"Hi\x00\x7f\x1f~ " + bytes([0x80, 0xFF]) + b"z" * 7
    line = hex_dump(data).splitlines()[0]
    ascii_column = line.split("  ")[-1]
    expected = "".join(chr(b) if 32 <= b <= 126 else "." for b in data)
    assert ascii_column == expected


def test_hex_column_round_trips():
    data = bytes(range(256))
    recovered = bytearray()
    for line in hex_dump(data).splitlines():
        hex_part = line[len("00000000:  "):].split("  ")[0]
        recovered += bytes.fromhex(hex_part.replace(" ", ""))
    assert bytes(recovered) == data


def test_hex_log_returns_and_logs_dump(caplog):
    with caplog.at_level(logging.INFO, logger="elfshield.hexlog"):
        dump = hex_log("load", 42, b"ABC")
    assert dump == hex_dump(b"ABC")
    assert "[ hexLog ] load(42), Data Size: 3" in caplog.text
    assert dump in caplog.text


def test_hex_log_skips_oversized_data(caplog):
    size = MAX_LINE_LEN // 2
    with caplog.at_level(logging.INFO, logger="elfshield.hexlog"):
        result = hex_log("big", 1, bytes(size))
    assert result is None
    assert f"Org Size Skip: {size}" in caplog.text


def test_hex_log_accepts_data_just_below_limit():
    size = MAX_LINE_LEN // 2 - 1
    dump = hex_log("edge", 2, bytes(size))
    assert dump == hex_dump(bytes(size))