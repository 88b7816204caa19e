# elfshield

Pieces for hardening ELF shared libraries (such as Android `.so` files)
against casual inspection. Everything here is a library; the package needs
nothing beyond the Python standard library and runs on Python 3.10 and later.

## What is in the package

- **Decryption stub templates** (`elfshield.shellcode_blobs`): two 32-bit ARM
  routines, selected with `template_for(kind)` and a `ShellCodeType`
  (`ENCRYPT_DYNSTR` or `ENCRYPT_RODATA`). Each XORs a section with
  `XOR_KEY` (`0x12`), calls `cacheflush` (`ARM_NR_CACHEFLUSH`) and returns.
  `dynstr_shellcode_size()` and `rodata_shellcode_size()` give the template
  sizes.
- **Prepared stubs** (`elfshield.shellcode`): `EncryptDynstrShellCode` and
  `EncryptRodataShellCode` extend a template with a zeroed tail of 32-bit
  little-endian words. Pass the named parameters to `set_params`, pick them
  up with `resolve_params`, write them into the tail with
  `append_data_in_shellcode_tail`, then read `shellcode` and `size`.
  `dump()` returns a hex dump of the stub. An empty parameter set, too few
  parameters, or a value that does not fit in 32 bits raises
  `ShellCodeError` (a `ValueError`).
  - dynstr parameters: `shellcodeaddr`, `dynstraddr`, `olddynstraddr`,
    `dynstrlen`. With `has_new_dynstr=False` the old dynstr address is left
    out of the tail.
  - rodata parameters: `shellcodeaddr`, `rodataaddr`, `rodatalen`.
- **JNI table offsets** (`elfshield.jni_offsets`, `elfshield.jni_tables`):
  turn a byte offset into the `JNIEnv` or `JavaVM` function table into the
  name of the function stored there, and a name back into its offset. The
  full tables are `JNI_ENV_METHODS` and `JAVA_VM_METHODS`; the pointer size
  defaults to that of the running interpreter.
- **File utilities** (`elfshield.sysutil`): `map_file` (private,
  copy-on-write), `map_file_read_only`, `map_file_segment` and
  `create_private_map` return a `MemMapping`, usable as a context manager;
  `write_fully` writes a whole buffer, retrying after partial writes;
  `copy_file_to_file` copies an exact number of bytes and raises `EOFError`
  when the input runs short.
- **Hex dumps** (`elfshield.hexlog`): `hex_dump(data)` returns the dump as a
  string; `hex_log(function, line_no, data)` logs it and returns it, or
  returns `None` for data too large to dump.
- **Prefix check** (`elfshield.strutil`): `is_begin_with(text, prefix, length)`.

## Examples

Prepare a rodata stub:

```python
from elfshield.shellcode import EncryptRodataShellCode

stub = EncryptRodataShellCode()
stub.set_params({"shellcodeaddr": 0x8000, "rodataaddr": 0x4000, "rodatalen": 0x200})
stub.resolve_params()
stub.append_data_in_shellcode_tail()
code = stub.shellcode      # template followed by the three tail words
```

Look up JNI functions by table offset:

```python
from elfshield.jni_offsets import jni_env_method_name, java_vm_method_name
from elfshield.jni_tables import jni_env_method_offset

jni_env_method_name(24, 4)              # 'FindClass'  (slot 6 on a 32-bit target)
java_vm_method_name(24, 8)              # 'DestroyJavaVM'  (slot 3 on a 64-bit target)
jni_env_method_offset("FindClass", 4)   # 24
```

Offsets past the end of a table give `'Not Find'`; an unknown name passed to
`jni_env_method_offset` or `java_vm_method_offset` raises `ValueError`.

Check a prefix over a fixed number of characters:

```python
from elfshield.strutil import is_begin_with

is_begin_with("libtest.so", "lib", 3)   # True
```

Map a file and dump the start of it:

```python
from elfshield.sysutil import map_file_read_only
from elfshield.hexlog import hex_dump

with open("libtest.so", "rb") as f, map_file_read_only(f) as mapping:
    print(hex_dump(mapping.data[:64]))
```

`hex_dump` prints sixteen bytes per line: the offset, the bytes in groups of
four, then the printable characters with everything else shown as `.`. A
short last line is padded with zero bytes.

## What the package does not do

There is no command-line tool and no ELF reader or writer. The package does
not parse an ELF file, encrypt its sections, add sections or `init_array`
entries, or write a rebuilt library; it supplies the stubs, lookups and file
helpers that such a tool would use.

## Running the tests

Install the `test` extra and run pytest from the project directory.