import pytest

from elfshield.strutil import is_begin_with


@pytest.mark.parametrize(
    "text, prefix, length, expected",
    [
        ("libfoo.so", "lib", 3, True),
        ("libfoo.so", "lab", 3, False),
        ("abcX", "abcY", 3, True),
        ("abcX", "abcY", 4, False),
        ("abc", "ab", 3, False),
        ("a", "ab", 2, False),
        ("anything", "else", 0, True),
        ("anything", "else", -1, True),
    ],
)
def test_is_begin_with(text, prefix, length, expected):
    assert is_begin_with(text, prefix, length) is expected


def test_is_begin_with_bytes():
    assert is_begin_with(b".dynstr", b".dyn", 4) is True
    assert is_begin_with(b".rodata", b".dyn", 4) is False