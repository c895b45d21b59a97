"""
Clones against real authenticated remotes.

Skipped unless the remote is described through environment variables:

    VCSCLIENT_TEST_HTTP_URL, VCSCLIENT_TEST_USERNAME, VCSCLIENT_TEST_PASSWORD
    VCSCLIENT_TEST_SSH_URL, VCSCLIENT_TEST_PRIVATE_KEY_PATH

The remote is expected to contain a README.md on its default branch.
"""

import os
from pathlib import Path

import pytest

from vcsclient import (
    AuthType,
    GitClient,
    with_auth_type,
    with_is_mem,
    with_password,
    with_path,
    with_private_key,
    with_private_key_path,
    with_remote_url,
    with_username,
)

HTTP_URL = os.environ.get("VCSCLIENT_TEST_HTTP_URL")
USERNAME = os.environ.get("VCSCLIENT_TEST_USERNAME")
PASSWORD = os.environ.get("VCSCLIENT_TEST_PASSWORD")
SSH_URL = os.environ.get("VCSCLIENT_TEST_SSH_URL")
PRIVATE_KEY_PATH = os.environ.get("VCSCLIENT_TEST_PRIVATE_KEY_PATH")

needs_http = pytest.mark.skipif(
    not (HTTP_URL and USERNAME and PASSWORD), reason="no HTTP test remote configured"
)
needs_ssh = pytest.mark.skipif(
    not (SSH_URL and PRIVATE_KEY_PATH), reason="no SSH test remote configured"
)


@pytest.mark.integration
class TestAuthenticatedClone:
    @needs_http
    def test_http(self, local_path, registry):
        client = GitClient(
            with_path(str(local_path)),
            with_remote_url(HTTP_URL),
            with_auth_type(AuthType.HTTP),
            with_username(USERNAME),
            with_password(PASSWORD),
            registry=registry,
        )
        try:
            assert client.get_remote_url() == HTTP_URL
            assert client.get_auth_type() == AuthType.HTTP
            assert client.get_username() == USERNAME
            assert (local_path / "README.md").exists()
        finally:
            client.dispose()

    @needs_ssh
    def test_ssh_key_path(self, local_path, registry):
        client = GitClient(
            with_path(str(local_path)),
            with_remote_url(SSH_URL),
            with_auth_type(AuthType.SSH),
            with_private_key_path(PRIVATE_KEY_PATH),
            registry=registry,
        )
        try:
            assert client.get_auth_type() == AuthType.SSH
            assert client.get_private_key_path() == PRIVATE_KEY_PATH
            assert (local_path / "README.md").exists()
        finally:
            client.dispose()

    @needs_ssh
    def test_ssh_inline_key_in_memory(self, local_path, registry):
        key = Path(PRIVATE_KEY_PATH).expanduser().read_bytes()
        client = GitClient(
            with_path(str(local_path)),
            with_remote_url(SSH_URL),
            with_auth_type(AuthType.SSH),
            with_private_key(key),
            with_is_mem(),
            registry=registry,
        )
        try:
            assert client.handle.fs.exists("README.md")
            assert client.get_private_key_path() is None
        finally:
            client.dispose()
