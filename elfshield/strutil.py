"""Small string helpers."""

from __future__ import annotations

from typing import AnyStr


def is_begin_with(text: AnyStr, prefix: AnyStr, length: int) -> bool:
    """Return whether the first ``length`` items of ``text`` and ``prefix`` agree."""
    if length <= 0:
        return True
    return text[:length] == prefix[:length]