"""Names of JNI function-table slots looked up by byte offset.

An offset inside a ``JNIEnv`` or ``JavaVM`` function table is turned back
into the name of the method stored there. Offsets that fall inside a slot
resolve to that slot; offsets past the end of the table resolve to
``NOT_FOUND``.
"""

from __future__ import annotations

from collections.abc import Sequence

from elfshield.jni_tables import JAVA_VM_METHODS, JNI_ENV_METHODS, NATIVE_POINTER_SIZE

NOT_FOUND = "Not Find"


def _method_name(table: Sequence[str], offset: int, pointer_size: int) -> str:
    if pointer_size <= 0:
        raise ValueError(f"pointer size must be positive, got {pointer_size}")
    if offset < 0:
        return NOT_FOUND
    slot = offset // pointer_size
    if slot >= len(table):
        return NOT_FOUND
    return table[slot]


def java_vm_method_name(offset: int, pointer_size: int = NATIVE_POINTER_SIZE) -> str:
    """Return the JavaVM method stored at byte ``offset`` of its function table."""
    return _method_name(JAVA_VM_METHODS, offset, pointer_size)


def jni_env_method_name(offset: int, pointer_size: int = NATIVE_POINTER_SIZE) -> str:
    """Return the JNIEnv method stored at byte ``offset`` of its function table."""
    return _method_name(JNI_ENV_METHODS, offset, pointer_size)