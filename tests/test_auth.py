"""Tests for auth strategy resolution and transport arguments."""

import os
import stat

import pytest

from vcsclient import (
    AuthType,
    HTTPBasicAuth,
    InlineKey,
    KeyPath,
    NoAuth,
    SSHKeyAuth,
    resolve_auth,
    resolve_config,
    with_auth_type,
    with_password,
    with_path,
    with_private_key,
    with_private_key_path,
    with_username,
)
from vcsclient.git.transport import transport_kwargs, url_username


@pytest.mark.short
class TestResolveAuth:
    def test_none(self):
        auth = resolve_auth(resolve_config(with_path("repo")))
        assert auth == NoAuth()
        assert auth.auth_type == AuthType.NONE

    def test_none_ignores_supplied_credentials(self):
        config = resolve_config(
            with_path("repo"), with_username("alice"), with_password("secret")
        )
        assert resolve_auth(config) == NoAuth()

    def test_http(self):
        config = resolve_config(
            with_path("repo"),
            with_auth_type(AuthType.HTTP),
            with_username("alice"),
            with_password("secret"),
        )
        auth = resolve_auth(config)
        assert auth == HTTPBasicAuth(username="alice", password="secret")
        assert "secret" not in repr(auth)

    def test_ssh_inline_key(self):
        config = resolve_config(
            with_path("repo"),
            with_auth_type(AuthType.SSH),
            with_username("git"),
            with_password("passphrase"),
            with_private_key(b"KEY DATA"),
        )
        auth = resolve_auth(config)
        assert isinstance(auth, SSHKeyAuth)
        assert auth.username == "git"
        assert auth.key_source == InlineKey(b"KEY DATA")
        assert "KEY DATA" not in repr(auth)

    def test_ssh_key_path(self):
        config = resolve_config(
            with_path("repo"),
            with_auth_type(AuthType.SSH),
            with_private_key_path("/keys/id_ed25519"),
        )
        auth = resolve_auth(config)
        assert auth == SSHKeyAuth(key_source=KeyPath("/keys/id_ed25519"))
        assert auth.username is None

    def test_strategies_are_immutable(self):
        auth = HTTPBasicAuth(username="alice", password="secret")
        with pytest.raises(AttributeError):
            auth.username = "mallory"


@pytest.mark.short
class TestUrlUsername:
    @pytest.mark.parametrize(
        "url, expected",
        [
            ("git@github.com:user/repo.git", "git"),
            ("ssh://deploy@example.org:2222/repo.git", "deploy"),
            ("https://alice@example.org/repo.git", "alice"),
            ("https://example.org/repo.git", None),
            ("github.com:user/repo.git", None),
            ("/srv/git/repo.git", None),
            (None, None),
        ],
    )
    def test_url_username(self, url, expected):
        assert url_username(url) == expected


@pytest.mark.short
class TestTransportKwargs:
    def test_no_auth(self):
        with transport_kwargs(NoAuth(), "/srv/git/repo.git") as kwargs:
            assert kwargs == {}

    def test_http(self):
        strategy = HTTPBasicAuth(username="alice", password="secret")
        with transport_kwargs(strategy, "https://example.org/r.git") as kwargs:
            assert kwargs == {"username": "alice", "password": "secret"}

    def test_ssh_key_path(self):
        strategy = SSHKeyAuth(key_source=KeyPath("~/.ssh/id_rsa"), username="git")
        with transport_kwargs(strategy, "ssh://example.org/repo.git") as kwargs:
            assert kwargs == {
                "username": "git",
                "key_filename": os.path.expanduser("~/.ssh/id_rsa"),
            }

    def test_ssh_username_in_url_takes_precedence(self):
        strategy = SSHKeyAuth(key_source=KeyPath("/keys/id"), username="alice")
        with transport_kwargs(strategy, "git@github.com:user/repo.git") as kwargs:
            assert "username" not in kwargs
            assert kwargs["key_filename"] == "/keys/id"

    def test_ssh_inline_key_written_to_private_file(self):
        strategy = SSHKeyAuth(key_source=InlineKey(b"PRIVATE"), username="git")
        with transport_kwargs(strategy, "ssh://example.org/repo.git") as kwargs:
            key_file = kwargs["key_filename"]
            assert os.path.exists(key_file)
            assert stat.S_IMODE(os.stat(key_file).st_mode) == 0o600
            with open(key_file, "rb") as f:
                assert f.read() == b"PRIVATE\n"
        assert not os.path.exists(key_file)

    def test_inline_key_removed_on_error(self):
        strategy = SSHKeyAuth(key_source=InlineKey(b"PRIVATE\n"))
        with pytest.raises(RuntimeError):
            with transport_kwargs(strategy, "ssh://example.org/r.git") as kwargs:
                key_file = kwargs["key_filename"]
                raise RuntimeError("transport failed")
        assert not os.path.exists(key_file)
