"""Layouts of the JNI function tables and offsets of their slots.

``JNI_ENV_METHODS`` follows the ``JNINativeInterface`` table reached
through a ``JNIEnv`` and ``JAVA_VM_METHODS`` the ``JNIInvokeInterface``
table reached through a ``JavaVM``. Every slot is one pointer wide, so a
slot's offset is its index times the pointer size.
"""

from __future__ import annotations

import struct
from collections.abc import Mapping, Sequence
from types import MappingProxyType

NATIVE_POINTER_SIZE = struct.calcsize("P")

_VALUE_TYPES = ("Object", "Boolean", "Byte", "Char", "Short", "Int", "Long", "Float", "Double")
_CALL_TYPES = _VALUE_TYPES + ("Void",)
_PRIMITIVE_TYPES = _VALUE_TYPES[1:]
_CALL_SUFFIXES = ("", "V", "A")


def _calls(prefix: str) -> list[str]:
    return [
        f"{prefix}{jtype}Method{suffix}"
        for jtype in _CALL_TYPES
        for suffix in _CALL_SUFFIXES
    ]


def _fields(prefix: str) -> list[str]:
    return [
        f"{action}{prefix}{jtype}Field"
        for action in ("Get", "Set")
        for jtype in _VALUE_TYPES
    ]


def _arrays(template: str) -> list[str]:
    return [template.format(jtype) for jtype in _PRIMITIVE_TYPES]


JNI_ENV_METHODS: tuple[str, ...] = tuple(
    [
        "reserved0",
        "reserved1",
        "reserved2",
        "reserved3",
        "GetVersion",
        "DefineClass",
        "FindClass",
        "FromReflectedMethod",
        "FromReflectedField",
        "ToReflectedMethod",
        "GetSuperclass",
        "IsAssignableFrom",
        "ToReflectedField",
        "Throw",
        "ThrowNew",
        "ExceptionOccurred",
        "ExceptionDescribe",
        "ExceptionClear",
        "FatalError",
        "PushLocalFrame",
        "PopLocalFrame",
        "NewGlobalRef",
        "DeleteGlobalRef",
        "DeleteLocalRef",
        "IsSameObject",
        "NewLocalRef",
        "EnsureLocalCapacity",
        "AllocObject",
        "NewObject",
        "NewObjectV",
        "NewObjectA",
        "GetObjectClass",
        "IsInstanceOf",
        "GetMethodID",
    ]
    + _calls("Call")
    + _calls("CallNonvirtual")
    + ["GetFieldID"]
    + _fields("")
    + ["GetStaticMethodID"]
    + _calls("CallStatic")
    + ["GetStaticFieldID"]
    + _fields("Static")
    + [
        "NewString",
        "GetStringLength",
        "GetStringChars",
        "ReleaseStringChars",
        "NewStringUTF",
        "GetStringUTFLength",
        "GetStringUTFChars",
        "ReleaseStringUTFChars",
        "GetArrayLength",
        "NewObjectArray",
        "GetObjectArrayElement",
        "SetObjectArrayElement",
    ]
    + _arrays("New{}Array")
    + _arrays("Get{}ArrayElements")
    + _arrays("Release{}ArrayElements")
    + _arrays("Get{}ArrayRegion")
    + _arrays("Set{}ArrayRegion")
    + [
        "RegisterNatives",
        "UnregisterNatives",
        "MonitorEnter",
        "MonitorExit",
        "GetJavaVM",
        "GetStringRegion",
        "GetStringUTFRegion",
        "GetPrimitiveArrayCritical",
        "ReleasePrimitiveArrayCritical",
        "GetStringCritical",
        "ReleaseStringCritical",
        "NewWeakGlobalRef",
        "DeleteWeakGlobalRef",
        "ExceptionCheck",
        "NewDirectByteBuffer",
        "GetDirectBufferAddress",
        "GetDirectBufferCapacity",
        "GetObjectRefType",
    ]
)

JAVA_VM_METHODS: tuple[str, ...] = (
    "reserved0",
    "reserved1",
    "reserved2",
    "DestroyJavaVM",
    "AttachCurrentThread",
    "DetachCurrentThread",
    "GetEnv",
    "AttachCurrentThreadAsDaemon",
)


def _index(table: Sequence[str]) -> Mapping[str, int]:
    return MappingProxyType({name: slot for slot, name in enumerate(table)})


_JNI_ENV_SLOTS = _index(JNI_ENV_METHODS)
_JAVA_VM_SLOTS = _index(JAVA_VM_METHODS)


def _check_pointer_size(pointer_size: int) -> None:
    if pointer_size <= 0:
        raise ValueError(f"pointer size must be positive, got {pointer_size}")


def _offset(slots: Mapping[str, int], table_name: str, name: str, pointer_size: int) -> int:
    _check_pointer_size(pointer_size)
    try:
        slot = slots[name]
    except KeyError:
        raise ValueError(f"{table_name} has no method named {name!r}") from None
    return slot * pointer_size


def java_vm_method_offset(name: str, pointer_size: int = NATIVE_POINTER_SIZE) -> int:
    """Return the byte offset of ``name`` in the JavaVM function table."""
    return _offset(_JAVA_VM_SLOTS, "JNIInvokeInterface", name, pointer_size)


def jni_env_method_offset(name: str, pointer_size: int = NATIVE_POINTER_SIZE) -> int:
    """Return the byte offset of ``name`` in the JNIEnv function table."""
    return _offset(_JNI_ENV_SLOTS, "JNINativeInterface", name, pointer_size)