"""Tests for the in-memory repository registry."""

import os
import threading

import pytest
from dulwich.repo import MemoryRepo

from vcsclient import MemoryFileSystem, MemoryRegistry


@pytest.mark.short
class TestMemoryRegistry:
    def test_put_and_get(self):
        registry = MemoryRegistry()
        storage, fs = MemoryRepo(), MemoryFileSystem()
        registry.put("/repos/a", storage, fs)

        assert registry.get("/repos/a") == (storage, fs, True)
        assert "/repos/a" in registry
        assert len(registry) == 1

    def test_get_missing(self):
        assert MemoryRegistry().get("/repos/missing") == (None, None, False)

    def test_relative_and_absolute_paths_share_an_entry(self):
        registry = MemoryRegistry()
        storage, fs = MemoryRepo(), MemoryFileSystem()
        registry.put("./tmp/test_repo", storage, fs)

        assert registry.get_storage(os.path.abspath("tmp/test_repo")) is storage
        assert registry.get_filesystem("tmp/test_repo") is fs

    def test_put_overwrites(self):
        registry = MemoryRegistry()
        registry.put("/repos/a", MemoryRepo(), MemoryFileSystem())
        storage, fs = MemoryRepo(), MemoryFileSystem()
        registry.put("/repos/a", storage, fs)

        assert registry.get("/repos/a") == (storage, fs, True)
        assert len(registry) == 1

    def test_remove(self):
        registry = MemoryRegistry()
        registry.put("/repos/a", MemoryRepo(), MemoryFileSystem())
        registry.remove("/repos/a")

        assert "/repos/a" not in registry
        assert registry.get_storage("/repos/a") is None
        assert registry.get_filesystem("/repos/a") is None

    def test_remove_missing_is_noop(self):
        registry = MemoryRegistry()
        registry.remove("/repos/never")
        registry.remove("/repos/never")
        assert len(registry) == 0

    def test_snapshots_are_copies(self):
        registry = MemoryRegistry()
        registry.put("/repos/a", MemoryRepo(), MemoryFileSystem())

        storages = registry.storages()
        filesystems = registry.filesystems()
        registry.remove("/repos/a")

        assert list(storages) == ["/repos/a"]
        assert list(filesystems) == ["/repos/a"]
        assert registry.storages() == {}

    def test_clear(self):
        registry = MemoryRegistry()
        registry.put("/repos/a", MemoryRepo(), MemoryFileSystem())
        registry.put("/repos/b", MemoryRepo(), MemoryFileSystem())
        assert registry.paths() == ["/repos/a", "/repos/b"]

        registry.clear()
        assert registry.paths() == []

    def test_concurrent_access(self):
        registry = MemoryRegistry()
        errors = []

        def worker(n):
            try:
                for i in range(50):
                    path = f"/repos/{n}/{i}"
                    registry.put(path, MemoryRepo(), MemoryFileSystem())
                    storage, fs, found = registry.get(path)
                    assert found and storage is not None and fs is not None
                    if i % 2:
                        registry.remove(path)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(registry) == 8 * 25
