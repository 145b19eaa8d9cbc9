"""Output stores a host build writes into, and store identity detection.

A dev server keeps its output in a ``MemoryOutputStore``; a regular build
writes straight to disk through a ``DiskOutputStore``.  The environment
gate uses ``is_memory_store`` to tell them apart.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from diskforge.core.writer import ensure_parent_dir, write_plain

# Class names hosts use for their non-persistent output filesystems.
MEMORY_STORE_NAMES: frozenset[str] = frozenset({"MemoryFileSystem", "MemoryOutputStore"})


def is_memory_store(store: Any) -> bool:
    """Return True if *store* is non-persistent.

    A store may declare itself through an ``is_persistent`` attribute;
    otherwise its class name is checked against ``MEMORY_STORE_NAMES``.
    """
    if store is None:
        return False
    persistent = getattr(store, "is_persistent", None)
    if isinstance(persistent, bool):
        return not persistent
    return type(store).__name__ in MEMORY_STORE_NAMES


def describe_store(store: Any) -> str:
    """Short identity of a store for log messages."""
    return f'"{type(store).__name__}"'


class MemoryOutputStore:
    """Dictionary-backed, non-persistent output filesystem."""

    is_persistent = False

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def write_file(self, path: Path | str, data: bytes) -> None:
        with self._lock:
            self._files[str(path)] = bytes(data)

    def read_file(self, path: Path | str) -> bytes:
        with self._lock:
            try:
                return self._files[str(path)]
            except KeyError:
                raise FileNotFoundError(f"Not in memory store: {path}") from None

    def exists(self, path: Path | str) -> bool:
        with self._lock:
            return str(path) in self._files

    def list_files(self) -> list[str]:
        with self._lock:
            return sorted(self._files)


class DiskOutputStore:
    """Persistent output store that writes directly to the filesystem."""

    is_persistent = True

    def write_file(self, path: Path | str, data: bytes) -> None:
        target = Path(path)
        ensure_parent_dir(target)
        write_plain(target, data)

    def read_file(self, path: Path | str) -> bytes:
        return Path(path).read_bytes()

    def exists(self, path: Path | str) -> bool:
        return Path(path).is_file()
