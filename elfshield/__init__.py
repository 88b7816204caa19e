"""Decryption stubs, JNI table offsets, file mapping and hex dumps for protecting ELF shared libraries."""

__version__ = "0.1.0"