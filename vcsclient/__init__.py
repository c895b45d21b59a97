"""vcsclient: a configurable client facade over git repositories."""

__version__ = "0.1.0"

from vcsclient.client import GitClient
from vcsclient.constants import AuthType, Backend, ResetMode
from vcsclient.errors import (
    DetachedHeadError,
    InvalidArgsLengthError,
    InvalidAuthTypeError,
    InvalidOptionsError,
    InvalidRepoPathError,
    RepoAlreadyExistsError,
    RepositoryDisposedError,
    UnsupportedTypeError,
    VCSError,
)
from vcsclient.git import MemoryFileSystem, MemoryRegistry, memory_registry
from vcsclient.model import (
    ClientConfiguration,
    HTTPBasicAuth,
    InlineKey,
    KeyPath,
    NoAuth,
    SSHKeyAuth,
    resolve_auth,
    resolve_config,
    with_auth_type,
    with_is_mem,
    with_mode,
    with_password,
    with_path,
    with_private_key,
    with_private_key_path,
    with_remote_url,
    with_username,
)
from vcsclient.model.records import CommitRecord

__all__ = [
    "AuthType",
    "Backend",
    "ClientConfiguration",
    "CommitRecord",
    "DetachedHeadError",
    "GitClient",
    "HTTPBasicAuth",
    "InlineKey",
    "InvalidArgsLengthError",
    "InvalidAuthTypeError",
    "InvalidOptionsError",
    "InvalidRepoPathError",
    "KeyPath",
    "MemoryFileSystem",
    "MemoryRegistry",
    "NoAuth",
    "RepoAlreadyExistsError",
    "RepositoryDisposedError",
    "ResetMode",
    "SSHKeyAuth",
    "UnsupportedTypeError",
    "VCSError",
    "memory_registry",
    "resolve_auth",
    "resolve_config",
    "with_auth_type",
    "with_is_mem",
    "with_mode",
    "with_password",
    "with_path",
    "with_private_key",
    "with_private_key_path",
    "with_remote_url",
    "with_username",
]
