"""
Process-wide registry of in-memory repositories.

A memory-backed repository has no filesystem identity, so it is found again
through this registry: the object storage (a dulwich MemoryRepo) and the
working tree (a MemoryFileSystem) are stored under the repository path, which
here is only a logical key. Entries stay until removed explicitly; several
clients may share one in-memory repository by path.
"""

import logging
import os
import threading
from typing import Dict, List, Optional, Tuple

from dulwich.repo import MemoryRepo

from .memfs import MemoryFileSystem

logger = logging.getLogger(__name__)


def _key(path) -> str:
    return os.path.abspath(os.fspath(path))


class MemoryRegistry:
    """
    Thread-safe mapping from repository path to its in-memory resources.

    Keys are normalized with ``os.path.abspath`` so relative and absolute
    spellings of the same path address one entry.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._storages: Dict[str, MemoryRepo] = {}
        self._filesystems: Dict[str, MemoryFileSystem] = {}

    def put(self, path, storage: MemoryRepo, fs: MemoryFileSystem) -> None:
        """Register resources for *path*, replacing any previous entry."""
        key = _key(path)
        with self._lock:
            if key in self._storages:
                logger.debug(f"Replacing in-memory repository registered at {key}")
            self._storages[key] = storage
            self._filesystems[key] = fs

    def get(
        self, path
    ) -> Tuple[Optional[MemoryRepo], Optional[MemoryFileSystem], bool]:
        """Return ``(storage, fs, found)`` for *path*."""
        key = _key(path)
        with self._lock:
            if key not in self._storages:
                return None, None, False
            return self._storages[key], self._filesystems[key], True

    def remove(self, path) -> None:
        """Drop the entry for *path*; a missing entry is not an error."""
        key = _key(path)
        with self._lock:
            self._storages.pop(key, None)
            self._filesystems.pop(key, None)

    def get_storage(self, path) -> Optional[MemoryRepo]:
        with self._lock:
            return self._storages.get(_key(path))

    def get_filesystem(self, path) -> Optional[MemoryFileSystem]:
        with self._lock:
            return self._filesystems.get(_key(path))

    def storages(self) -> Dict[str, MemoryRepo]:
        """Snapshot of the path -> storage mapping."""
        with self._lock:
            return dict(self._storages)

    def filesystems(self) -> Dict[str, MemoryFileSystem]:
        """Snapshot of the path -> filesystem mapping."""
        with self._lock:
            return dict(self._filesystems)

    def paths(self) -> List[str]:
        with self._lock:
            return sorted(self._storages)

    def clear(self) -> None:
        with self._lock:
            self._storages.clear()
            self._filesystems.clear()

    def __contains__(self, path) -> bool:
        with self._lock:
            return _key(path) in self._storages

    def __len__(self) -> int:
        with self._lock:
            return len(self._storages)


# Shared by every client that is not given its own registry
memory_registry = MemoryRegistry()
