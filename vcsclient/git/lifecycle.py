"""
Opening, cloning, initializing and disposing repositories.

Decision procedure for a resolved configuration:

    disk backend (is_mem = False)
        path is a git repository   -> open it, remote URL is ignored
        remote URL given           -> clone into path (absent or empty only)
        otherwise                  -> initialize a new repository at path

    memory backend (is_mem = True)
        remote URL given           -> fetch into a fresh MemoryRepo
        otherwise                  -> fresh empty MemoryRepo
        either way the storage and working tree are registered under path

Errors raised by dulwich (network, authentication, protocol) reach the caller
unchanged and nothing is retried.
"""

import logging
import os
import shutil
from dataclasses import dataclass, field
from typing import Optional

from dulwich import porcelain
from dulwich.client import get_transport_and_path
from dulwich.errors import NotGitRepository
from dulwich.repo import BaseRepo, MemoryRepo, Repo
from filelock import FileLock

from vcsclient.constants import DEFAULT_BRANCH, DEFAULT_REMOTE, Backend
from vcsclient.errors import InvalidRepoPathError, RepoAlreadyExistsError
from vcsclient.model.auth import AuthStrategy
from vcsclient.model.config import ClientConfiguration
from .memfs import MemoryFileSystem
from .registry import MemoryRegistry
from .transport import transport_kwargs
from .worktree import BRANCH_PREFIX, HEAD, DiskWorktree, MemoryWorktree, Worktree

logger = logging.getLogger(__name__)

# suffix of the peeled entries servers advertise next to annotated tags
PEELED_TAG_SUFFIX = b"^{}"


@dataclass
class RepositoryHandle:
    """A live repository owned by one client."""

    repo: BaseRepo
    backend: Backend
    path: str
    worktree: Worktree
    fs: Optional[MemoryFileSystem] = field(default=None, repr=False)

    @property
    def is_mem(self) -> bool:
        return self.backend == Backend.MEMORY


def lock_path(path: str) -> str:
    return f"{path}.lock"


def _open_if_repository(path: str) -> Optional[Repo]:
    if not os.path.isdir(path):
        return None
    try:
        return Repo(path)
    except NotGitRepository:
        return None


def _check_directory(path: str) -> None:
    if os.path.exists(path) and not os.path.isdir(path):
        raise InvalidRepoPathError(path, "not a directory")


def _open_disk(config: ClientConfiguration, auth: AuthStrategy) -> RepositoryHandle:
    path = config.path
    _check_directory(path)
    parent = os.path.dirname(path)
    try:
        os.makedirs(parent, exist_ok=True)
    except OSError as e:
        raise InvalidRepoPathError(path, str(e)) from e

    with FileLock(lock_path(path)):
        repo = _open_if_repository(path)
        if repo is not None:
            logger.debug(f"Opening existing repository at {path}")
        elif config.remote_url:
            if os.path.isdir(path) and os.listdir(path):
                raise RepoAlreadyExistsError(path)
            logger.info(f"Cloning {config.remote_url} into {path}")
            with transport_kwargs(auth, config.remote_url) as kwargs:
                repo = porcelain.clone(
                    config.remote_url, path, checkout=True, **kwargs
                )
        else:
            logger.info(f"Initializing new repository at {path}")
            os.makedirs(path, exist_ok=True)
            repo = porcelain.init(path)

    return RepositoryHandle(
        repo=repo,
        backend=Backend.DISK,
        path=path,
        worktree=DiskWorktree(repo),
    )


def _fetch_into_memory(
    storage: MemoryRepo, url: str, auth: AuthStrategy
) -> Optional[bytes]:
    """Fetch every branch and tag of *url*; return the ref HEAD should follow."""
    with transport_kwargs(auth, url) as kwargs:
        client, remote_path = get_transport_and_path(url, **kwargs)
        result = client.fetch(remote_path, storage)

    refs = {
        name: sha
        for name, sha in result.refs.items()
        if sha is not None and not name.endswith(PEELED_TAG_SUFFIX)
    }
    remote_prefix = f"refs/remotes/{DEFAULT_REMOTE}/".encode("ascii")
    for name, sha in refs.items():
        if name.startswith(BRANCH_PREFIX):
            storage.refs[remote_prefix + name[len(BRANCH_PREFIX) :]] = sha
        elif name.startswith(b"refs/tags/"):
            storage.refs[name] = sha

    head_ref = (result.symrefs or {}).get(HEAD)
    if head_ref is None:
        branches = sorted(n for n in refs if n.startswith(BRANCH_PREFIX))
        if DEFAULT_BRANCH in refs:
            head_ref = DEFAULT_BRANCH
        elif branches:
            head_ref = branches[0]
    if head_ref is not None and head_ref in refs:
        storage.refs[head_ref] = refs[head_ref]

    remote_section = (b"remote", DEFAULT_REMOTE.encode("ascii"))
    storage_config = storage.get_config()
    storage_config.set(remote_section, b"url", url.encode("utf-8"))
    storage_config.set(
        remote_section, b"fetch", b"+refs/heads/*:" + remote_prefix + b"*"
    )
    return head_ref


def _open_memory(
    config: ClientConfiguration, auth: AuthStrategy, registry: MemoryRegistry
) -> RepositoryHandle:
    storage = MemoryRepo.init_bare([], {})
    fs = MemoryFileSystem()
    worktree = MemoryWorktree(storage, fs)

    head_ref = None
    if config.remote_url:
        logger.info(f"Cloning {config.remote_url} into memory at {config.path}")
        head_ref = _fetch_into_memory(storage, config.remote_url, auth)
    else:
        logger.info(f"Initializing in-memory repository at {config.path}")
    storage.refs.set_symbolic_ref(HEAD, head_ref or DEFAULT_BRANCH)
    worktree.populate(worktree.head_commit())

    registry.put(config.path, storage, fs)
    return RepositoryHandle(
        repo=storage,
        backend=Backend.MEMORY,
        path=config.path,
        worktree=worktree,
        fs=fs,
    )


def open_repository(
    config: ClientConfiguration, auth: AuthStrategy, registry: MemoryRegistry
) -> RepositoryHandle:
    """
    Open, clone or initialize the repository described by *config*.

    Args:
        config: Validated client configuration
        auth: Strategy used for the clone transport
        registry: Where memory-backed repositories are registered

    Returns:
        Handle to the repository

    Raises:
        InvalidRepoPathError: If the path is a file or its parent cannot be created
        RepoAlreadyExistsError: If a clone targets a non-empty directory
    """
    if config.is_mem:
        return _open_memory(config, auth, registry)
    return _open_disk(config, auth)


def dispose(handle: RepositoryHandle, registry: MemoryRegistry) -> None:
    """
    Release everything held by *handle*.

    Disk repositories are deleted from the filesystem; errors such as a
    missing directory or denied permission propagate. Memory repositories
    are removed from the registry, which is a no-op when already gone.
    """
    if handle.is_mem:
        logger.info(f"Releasing in-memory repository at {handle.path}")
        registry.remove(handle.path)
        return

    logger.info(f"Deleting repository at {handle.path}")
    handle.repo.close()
    shutil.rmtree(handle.path)
    try:
        os.remove(lock_path(handle.path))
    except FileNotFoundError:
        pass
