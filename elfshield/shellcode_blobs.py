"""Machine-code templates for the ARM decryption stubs.

Each template is a 32-bit ARM routine that runs from the ``init_array``
of a rebuilt ELF. It XORs a section with ``XOR_KEY``, flushes the
instruction cache through the ``cacheflush`` system call and returns.
The last word of each template holds the system call number.

The parameters a stub needs are appended after the template when it is
prepared for a particular file. For the dynstr stub these are the stub's
own address, the new dynstr address, the old dynstr address and the
dynstr length. For the rodata stub they are the stub's address, the
rodata address and the rodata length.
"""

from __future__ import annotations

import enum
import logging

logger = logging.getLogger(__name__)

XOR_KEY = 0x12
ARM_NR_CACHEFLUSH = 0x000F0002


class ShellCodeType(enum.IntEnum):
    """Which section a stub decrypts."""

    ENCRYPT_DYNSTR = 0
    ENCRYPT_RODATA = 1


# push {r4-r10, lr}; derive the load base; XOR the old dynstr into the new
# one; cacheflush(new, new + len, 0); pop {r4-r10, pc}; .word cacheflush
_ENC_DYNSTR_SHELLCODE = bytes.fromhex(
    "F0472DE9"
    "0CA04FE2"
    "64909FE5"
    "09A04AE0"
    "60909FE5"
    "60809FE5"
    "60709FE5"
    "4C409FE5"
    "0A8088E0"
    "0A9089E0"
    "0800A0E1"
    "0910A0E1"
    "0720A0E1"
    "0030A0E3"
    "0060A0E3"
    "0360D0E7"
    "125026E2"
    "0350C1E7"
    "013083E2"
    "020053E1"
    "F8FFFFBA"
    "0900A0E1"
    "07A089E0"
    "0A10A0E1"
    "0470A0E1"
    "0020A0E3"
    "000000EF"
    "F087BDE8"
    "02000F00"
)

# push {r5-r10, lr}; derive the load base; XOR rodata in place;
# cacheflush(rodata, rodata + len, 0); pop {r5-r10, pc}; .word cacheflush
_ENC_RODATA_SHELLCODE = bytes.fromhex(
    "E0472DE9"
    "0CA04FE2"
    "58909FE5"
    "09A04AE0"
    "54909FE5"
    "54809FE5"
    "44709FE5"
    "0A9089E0"
    "0900A0E1"
    "0010A0E1"
    "0820A0E1"
    "0030A0E3"
    "0060A0E3"
    "0360D0E7"
    "125026E2"
    "0350C1E7"
    "013083E2"
    "020053E1"
    "F8FFFFBA"
    "0900A0E1"
    "08A089E0"
    "0A10A0E1"
    "0020A0E3"
    "000000EF"
    "E087BDE8"
    "02000F00"
)

_TEMPLATES = {
    ShellCodeType.ENCRYPT_DYNSTR: _ENC_DYNSTR_SHELLCODE,
    ShellCodeType.ENCRYPT_RODATA: _ENC_RODATA_SHELLCODE,
}


def template_for(kind: ShellCodeType) -> bytes:
    """Return the stub template for ``kind``."""
    try:
        return _TEMPLATES[ShellCodeType(kind)]
    except (ValueError, KeyError):
        raise ValueError(f"no shell code template for {kind!r}") from None


def dynstr_shellcode_size() -> int:
    """Return the size in bytes of the dynstr decryption stub template."""
    size = len(_ENC_DYNSTR_SHELLCODE)
    logger.info("[+] shell code size = %d", size)
    return size


def rodata_shellcode_size() -> int:
    """Return the size in bytes of the rodata decryption stub template."""
    size = len(_ENC_RODATA_SHELLCODE)
    logger.info("[+] shell code size = %d", size)
    return size