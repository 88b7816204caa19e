[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "elfshield"
version = "0.1.0"
description = "Building blocks for protecting ELF shared libraries: ARM decryption stubs for .dynstr and .rodata, JNI table offsets, file mapping and hex dumps"
requires-python = ">=3.10"
dependencies = []
keywords = ["elf", "shared-library", "protection", "obfuscation", "jni", "arm", "hexdump", "mmap"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["elfshield"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
