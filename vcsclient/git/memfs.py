"""In-process working tree for memory-backed repositories."""

import posixpath
from typing import Dict, Iterator, List, Tuple


class MemoryFileSystem:
    """
    A flat mapping of repository-relative POSIX paths to file contents.

    Directories are implicit: they exist as long as a file lives below them.
    Paths are normalized, so ``"a/./b.txt"`` and ``"a/b.txt"`` name the same
    file; absolute paths and paths escaping the root are rejected.
    """

    def __init__(self):
        self._files: Dict[str, Tuple[bytes, int]] = {}

    @staticmethod
    def _norm(path: str) -> str:
        if isinstance(path, bytes):
            path = path.decode("utf-8")
        path = path.replace("\\", "/")
        norm = posixpath.normpath(path)
        if norm.startswith("/") or norm == ".." or norm.startswith("../"):
            raise ValueError(f"path outside of working tree: {path!r}")
        if norm == ".":
            raise ValueError("empty path")
        return norm

    def write(self, path: str, data, mode: int = 0o100644) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._files[self._norm(path)] = (bytes(data), mode)

    def read(self, path: str) -> bytes:
        try:
            return self._files[self._norm(path)][0]
        except KeyError:
            raise FileNotFoundError(path)

    def mode(self, path: str) -> int:
        try:
            return self._files[self._norm(path)][1]
        except KeyError:
            raise FileNotFoundError(path)

    def exists(self, path: str) -> bool:
        norm = self._norm(path)
        if norm in self._files:
            return True
        prefix = norm + "/"
        return any(name.startswith(prefix) for name in self._files)

    def isfile(self, path: str) -> bool:
        return self._norm(path) in self._files

    def remove(self, path: str) -> None:
        try:
            del self._files[self._norm(path)]
        except KeyError:
            raise FileNotFoundError(path)

    def listdir(self, path: str = "") -> List[str]:
        prefix = "" if path in ("", ".", "/") else self._norm(path) + "/"
        entries = set()
        for name in self._files:
            if name.startswith(prefix):
                entries.add(name[len(prefix) :].split("/", 1)[0])
        if prefix and not entries:
            raise FileNotFoundError(path)
        return sorted(entries)

    def walk(self) -> Iterator[Tuple[str, bytes, int]]:
        """Yield ``(path, data, mode)`` for every file, sorted by path."""
        for name in sorted(self._files):
            data, mode = self._files[name]
            yield name, data, mode

    def clear(self) -> None:
        self._files.clear()

    def __contains__(self, path: str) -> bool:
        return self.exists(path)

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"MemoryFileSystem(<{len(self._files)} files>)"

