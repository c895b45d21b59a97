"""Configuration and authentication models."""

from .auth import (
    AuthStrategy,
    HTTPBasicAuth,
    InlineKey,
    KeyPath,
    KeySource,
    NoAuth,
    SSHKeyAuth,
    resolve_auth,
)
from .config import ClientConfiguration, normalize_repo_path
from .options import (
    Option,
    apply_options,
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

__all__ = [
    "AuthStrategy",
    "ClientConfiguration",
    "HTTPBasicAuth",
    "InlineKey",
    "KeyPath",
    "KeySource",
    "NoAuth",
    "Option",
    "SSHKeyAuth",
    "apply_options",
    "normalize_repo_path",
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
