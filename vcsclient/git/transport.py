"""Translate an AuthStrategy into dulwich transport keyword arguments."""

import logging
import os
import re
import tempfile
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional
from urllib.parse import urlparse

from vcsclient.model.auth import (
    AuthStrategy,
    HTTPBasicAuth,
    InlineKey,
    NoAuth,
    SSHKeyAuth,
)

logger = logging.getLogger(__name__)

# user@host:path, without a scheme
_SCP_LIKE = re.compile(r"^(?:(?P<user>[^@/:]+)@)?(?P<host>[^/:]+):(?!//)")


def url_username(url: Optional[str]) -> Optional[str]:
    """Return the user embedded in an SSH/HTTP URL, if any."""
    if not url:
        return None
    if "://" in url:
        return urlparse(url).username
    match = _SCP_LIKE.match(url)
    if match:
        return match.group("user")
    return None


@contextmanager
def _key_file(data: bytes) -> Iterator[str]:
    """Write inline key material to a private temporary file."""
    fd, path = tempfile.mkstemp(prefix="vcsclient-key-")
    try:
        os.chmod(path, 0o600)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            if not data.endswith(b"\n"):
                # OpenSSH refuses keys without the trailing newline
                f.write(b"\n")
        yield path
    finally:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass


@contextmanager
def transport_kwargs(
    strategy: AuthStrategy, url: Optional[str] = None
) -> Iterator[Dict[str, Any]]:
    """
    Yield keyword arguments for ``dulwich.client.get_transport_and_path``.

    The same arguments are accepted by ``porcelain.clone`` and
    ``porcelain.push``, which forward them to the transport. For inline SSH
    keys a temporary key file exists only while the context is open.

    Args:
        strategy: Resolved authentication strategy
        url: Remote URL; a user embedded in it takes precedence over the
            strategy's username

    Yields:
        Dictionary of transport keyword arguments (empty for NoAuth)
    """
    if isinstance(strategy, HTTPBasicAuth):
        yield {"username": strategy.username, "password": strategy.password}
        return

    if isinstance(strategy, SSHKeyAuth):
        kwargs: Dict[str, Any] = {}
        if strategy.username and url_username(url) is None:
            kwargs["username"] = strategy.username
        if isinstance(strategy.key_source, InlineKey):
            with _key_file(strategy.key_source.data) as key_filename:
                logger.debug("Using inline SSH key through a temporary key file")
                kwargs["key_filename"] = key_filename
                yield kwargs
        else:
            kwargs["key_filename"] = os.path.expanduser(strategy.key_source.path)
            yield kwargs
        return

    if not isinstance(strategy, NoAuth):
        raise TypeError(f"unknown auth strategy: {strategy!r}")
    yield {}
