"""Decryption stubs prepared for a particular ELF file.

A stub is a machine-code template followed by a small tail of 32-bit
little-endian words. The tail holds the addresses and lengths the stub
reads at run time. Parameters are handed over by name with
:meth:`ShellCode.set_params`, picked up by :meth:`ShellCode.resolve_params`
and written into the tail by :meth:`ShellCode.append_data_in_shellcode_tail`.
"""

from __future__ import annotations

import abc
import logging
import struct
from collections.abc import Mapping

from elfshield.hexlog import hex_dump
from elfshield.shellcode_blobs import (
    ShellCodeType,
    dynstr_shellcode_size,
    rodata_shellcode_size,
    template_for,
)

logger = logging.getLogger(__name__)

_WORD = struct.Struct("<I")


class ShellCodeError(ValueError):
    """Raised when a stub is given missing or unusable parameters."""


def _pack_words(values: list[int]) -> bytes:
    try:
        return b"".join(_WORD.pack(value) for value in values)
    except struct.error as exc:
        raise ShellCodeError(f"parameter does not fit in 32 bits: {values}") from exc


class ShellCode(abc.ABC):
    """A stub template extended with a zeroed tail for its parameters."""

    required_params = 1

    def __init__(self, kind: ShellCodeType, template_size: int, tail_size: int) -> None:
        self.kind = ShellCodeType(kind)
        self.template = template_for(self.kind)
        self.tail_offset = template_size
        self.params: dict[str, int] = {}
        self._code = bytearray(template_size + tail_size)
        self._code[:template_size] = self.template[:template_size]
        logger.info("[*] new shell code size = %d", len(self._code))

    @property
    def shellcode(self) -> bytes:
        """The stub with its tail as it stands now."""
        return bytes(self._code)

    @property
    def size(self) -> int:
        """Size in bytes of the stub including its tail."""
        return len(self._code)

    def set_params(self, params: Mapping[str, int]) -> None:
        """Store the named parameters the stub needs."""
        if not params:
            logger.info("[-] shellcode params were empty")
            raise ShellCodeError("shellcode params were empty")
        self.params = dict(params)

    def _check_param_count(self, what: str) -> None:
        if len(self.params) < self.required_params:
            logger.info("[-] enc %s params were not %d", what, self.required_params)
            raise ShellCodeError(
                f"enc {what} needs {self.required_params} params, got {len(self.params)}"
            )

    def _write_tail(self, values: list[int]) -> None:
        logger.info("[*] append data after shell code")
        words = _pack_words(values)
        start = self.tail_offset
        self._code[start:start + len(words)] = words

    @abc.abstractmethod
    def resolve_params(self) -> None:
        """Take the stub's values from the stored parameters."""

    @abc.abstractmethod
    def append_data_in_shellcode_tail(self) -> None:
        """Write the resolved values into the stub's tail."""

    def dump(self) -> str:
        """Return a hex dump of the stub."""
        return hex_dump(self._code)


class EncryptDynstrShellCode(ShellCode):
    """Stub that decrypts the old dynstr into a new dynstr section.

    With ``has_new_dynstr`` the tail holds the stub address, the new
    dynstr address, the old dynstr address and the dynstr length, followed
    by one spare word. Without it the old dynstr address is left out.
    """

    required_params = 4

    def __init__(self, has_new_dynstr: bool = True) -> None:
        self.has_new_dynstr = has_new_dynstr
        tail = 0x14 if has_new_dynstr else 0x10
        super().__init__(ShellCodeType.ENCRYPT_DYNSTR, dynstr_shellcode_size(), tail)
        self.shellcode_addr = 0
        self.dynstr_addr = 0
        self.old_dynstr_addr = 0
        self.dynstr_len = 0

    def resolve_params(self) -> None:
        self._check_param_count("dynstr")
        for name, value in self.params.items():
            if name == "shellcodeaddr":
                self.shellcode_addr = value
            elif name == "dynstraddr":
                self.dynstr_addr = value
            elif name == "olddynstraddr":
                self.old_dynstr_addr = value
            elif name == "dynstrlen":
                self.dynstr_len = value
            else:
                continue
            logger.info("[*] param %s = 0x%08x", name, value)

    def append_data_in_shellcode_tail(self) -> None:
        values = [self.shellcode_addr, self.dynstr_addr]
        if self.has_new_dynstr:
            values.append(self.old_dynstr_addr)
        values.append(self.dynstr_len)
        self._write_tail(values)


class EncryptRodataShellCode(ShellCode):
    """Stub that decrypts rodata in place.

    The tail holds the stub address, the rodata address and its length.
    """

    required_params = 3

    def __init__(self) -> None:
        super().__init__(ShellCodeType.ENCRYPT_RODATA, rodata_shellcode_size(), 0xC)
        self.shellcode_addr = 0
        self.rodata_addr = 0
        self.rodata_len = 0

    def resolve_params(self) -> None:
        self._check_param_count("rodata")
        for name, value in self.params.items():
            if name == "shellcodeaddr":
                self.shellcode_addr = value
            elif name == "rodataaddr":
                self.rodata_addr = value
            elif name == "rodatalen":
                self.rodata_len = value
            else:
                continue
            logger.info("[*] param %s = 0x%08x", name, value)

    def append_data_in_shellcode_tail(self) -> None:
        self._write_tail([self.shellcode_addr, self.rodata_addr, self.rodata_len])