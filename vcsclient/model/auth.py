"""
Authentication strategies.

An AuthStrategy is resolved once from a validated ClientConfiguration and never
changes afterwards. Only the variant matching the configured auth type carries
credential fields:

- NoAuth:        anonymous access (local paths, public remotes)
- HTTPBasicAuth: username and password sent over HTTP(S)
- SSHKeyAuth:    public key authentication, the key given either inline
                 (InlineKey) or as a file on disk (KeyPath)
"""

from dataclasses import dataclass
from typing import Optional, Union

from vcsclient.constants import AuthType
from .config import ClientConfiguration


@dataclass(frozen=True)
class InlineKey:
    """Private key material held in memory."""

    data: bytes

    def __repr__(self) -> str:
        return f"InlineKey(<{len(self.data)} bytes>)"


@dataclass(frozen=True)
class KeyPath:
    """Private key stored in a file."""

    path: str


KeySource = Union[InlineKey, KeyPath]


@dataclass(frozen=True)
class NoAuth:
    auth_type = AuthType.NONE


@dataclass(frozen=True)
class HTTPBasicAuth:
    username: str
    password: str

    auth_type = AuthType.HTTP

    def __repr__(self) -> str:
        return f"HTTPBasicAuth(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class SSHKeyAuth:
    key_source: KeySource
    username: Optional[str] = None

    auth_type = AuthType.SSH


AuthStrategy = Union[NoAuth, HTTPBasicAuth, SSHKeyAuth]


def resolve_auth(config: ClientConfiguration) -> AuthStrategy:
    """
    Turn the credential fields of a configuration into an AuthStrategy.

    The configuration is expected to be validated already; this function does
    not re-check the credential rules. Credentials supplied alongside
    AuthType.NONE are ignored, and so is the password of an SSH configuration.

    Args:
        config: Validated client configuration

    Returns:
        The strategy matching config.auth_type
    """
    if config.auth_type == AuthType.HTTP:
        return HTTPBasicAuth(username=config.username, password=config.password)

    if config.auth_type == AuthType.SSH:
        if config.private_key:
            source: KeySource = InlineKey(config.private_key)
        else:
            source = KeyPath(config.private_key_path)
        return SSHKeyAuth(key_source=source, username=config.username or None)

    return NoAuth()
