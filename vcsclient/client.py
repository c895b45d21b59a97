"""
GitClient: a single configurable object in front of a git repository.

Usage:
    from vcsclient import GitClient, with_path, with_remote_url

    client = GitClient(
        with_path("/tmp/work"),
        with_remote_url("https://github.com/user/repo.git"),
    )
    client.checkout_branch("feature")
    client.commit_all("Add feature")
    client.push()
    client.dispose()

A client is not safe for concurrent use; calls on one client must be
serialized by the caller. The registry of in-memory repositories is the only
state shared between clients.
"""

import logging
from typing import List, Optional

from vcsclient.config import get_commit_identity
from vcsclient.constants import DEFAULT_REMOTE, AuthType
from vcsclient.errors import InvalidOptionsError, RepositoryDisposedError
from vcsclient.git import (
    MemoryRegistry,
    RepositoryHandle,
    dispose,
    memory_registry,
    open_repository,
)
from vcsclient.git.transport import transport_kwargs
from vcsclient.model import (
    AuthStrategy,
    ClientConfiguration,
    Option,
    apply_options,
    resolve_auth,
    resolve_config,
)
from vcsclient.model.records import CommitRecord

logger = logging.getLogger(__name__)


class GitClient:
    """
    Opens, clones or initializes a repository and runs common operations on it.

    Args:
        *options: Options created by the ``with_*`` helpers; ``with_path`` is
            required
        registry: Registry for memory-backed repositories; defaults to the
            process-wide ``memory_registry``

    Raises:
        VCSError subclasses for invalid options, and any dulwich error raised
        while cloning
    """

    def __init__(self, *options: Option, registry: Optional[MemoryRegistry] = None):
        self._registry = registry if registry is not None else memory_registry
        self._config = resolve_config(*options)
        self._auth = resolve_auth(self._config)
        self._handle = open_repository(self._config, self._auth, self._registry)
        self._disposed = False

    def __repr__(self) -> str:
        return (
            f"GitClient(path={self._config.path!r}, "
            f"backend={self._handle.backend.value!r})"
        )

    # accessors

    @property
    def config(self) -> ClientConfiguration:
        return self._config

    @property
    def auth(self) -> AuthStrategy:
        return self._auth

    @property
    def handle(self) -> RepositoryHandle:
        return self._handle

    @property
    def registry(self) -> MemoryRegistry:
        return self._registry

    @property
    def path(self) -> str:
        return self._config.path

    @property
    def is_mem(self) -> bool:
        return self._config.is_mem

    @property
    def repository(self):
        return self._handle.repo

    @property
    def remote_url(self) -> Optional[str]:
        return self._config.remote_url

    @property
    def auth_type(self) -> AuthType:
        return self._config.auth_type

    @property
    def username(self) -> Optional[str]:
        return self._config.username

    @property
    def private_key_path(self) -> Optional[str]:
        return self._config.private_key_path

    def get_repository(self):
        return self.repository

    def get_remote_url(self) -> Optional[str]:
        return self.remote_url

    def get_auth_type(self) -> AuthType:
        return self.auth_type

    def get_username(self) -> Optional[str]:
        return self.username

    def get_private_key_path(self) -> Optional[str]:
        return self.private_key_path

    # operations

    def _worktree(self):
        if self._disposed:
            raise RepositoryDisposedError(self._config.path)
        return self._handle.worktree

    def commit_all(self, message: str) -> str:
        """
        Stage every change in the working tree and commit it.

        New, modified and deleted files are all included. Whether an empty
        commit is accepted is left to dulwich.

        Returns:
            Hex SHA of the new commit
        """
        worktree = self._worktree()
        sha = worktree.commit_all(message, identity=get_commit_identity())
        logger.info(f"Committed {sha[:7]} on {self.path}")
        return sha

    def checkout_branch(self, name: str) -> None:
        """Switch to branch *name*, creating it at HEAD when it does not exist."""
        self._worktree().checkout_branch(name)
        logger.debug(f"Checked out {name} in {self.path}")

    def get_current_branch(self) -> str:
        """
        Return the current branch as a full reference, e.g. ``refs/heads/main``.

        Raises:
            DetachedHeadError: If HEAD does not point to a branch
        """
        return self._worktree().current_branch()

    def push(self) -> None:
        """Push the current branch to the configured remote (or ``origin``)."""
        worktree = self._worktree()
        remote = self._config.remote_url or DEFAULT_REMOTE
        with transport_kwargs(self._auth, self._config.remote_url) as kwargs:
            worktree.push(remote, **kwargs)

    def reset(self, *options: Option) -> None:
        """
        Reset to HEAD.

        The mode comes from a ``with_mode(...)`` option or, when none is
        given, from the client configuration (hard by default). A hard reset
        also removes files that were never committed.
        """
        fields = apply_options(options, {"reset_mode": self._config.reset_mode})
        unexpected = set(fields) - {"reset_mode"}
        if unexpected:
            raise InvalidOptionsError(
                f"reset only accepts a mode option, got: {sorted(unexpected)}"
            )
        mode = fields["reset_mode"]
        self._worktree().reset(mode)
        logger.debug(f"Reset {self.path} ({mode.value})")

    def get_logs(self) -> List[CommitRecord]:
        """Commits reachable from HEAD, most recent first."""
        return self._worktree().logs()

    def dispose(self) -> None:
        """
        Release the repository.

        Deletes the directory of a disk-backed repository, or removes a
        memory-backed one from the registry. Treat as single use: calling it
        again on a disk-backed client fails because the directory is gone.
        """
        self._disposed = True
        dispose(self._handle, self._registry)
