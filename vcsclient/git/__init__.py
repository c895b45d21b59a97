"""
Git engine integration for vcsclient.

All git work is done by dulwich: disk repositories through ``dulwich.repo.Repo``
and ``dulwich.porcelain``, memory repositories through ``dulwich.repo.MemoryRepo``
plus a MemoryFileSystem working tree kept in the MemoryRegistry.
"""

from .lifecycle import RepositoryHandle, dispose, open_repository
from .memfs import MemoryFileSystem
from .registry import MemoryRegistry, memory_registry
from .transport import transport_kwargs, url_username
from .worktree import DiskWorktree, MemoryWorktree, Worktree, branch_ref

__all__ = [
    "DiskWorktree",
    "MemoryFileSystem",
    "MemoryRegistry",
    "MemoryWorktree",
    "RepositoryHandle",
    "Worktree",
    "branch_ref",
    "dispose",
    "memory_registry",
    "open_repository",
    "transport_kwargs",
    "url_username",
]
