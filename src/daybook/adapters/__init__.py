"""Adapters - I/O implementations of ports."""

from .file_kv import FileKeyValueStore
from .memory_kv import MemoryKeyValueStore

__all__ = [
    "FileKeyValueStore",
    "MemoryKeyValueStore",
]
