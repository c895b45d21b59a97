import io
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from dulwich import porcelain

from vcsclient import GitClient, MemoryRegistry, with_path, with_remote_url
from vcsclient.config import ConfigAccessor

IDENTITY = b"Test User <test@example.com>"
README = "README.md"
README_CONTENT = "# test repository\n"


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("vcsclient")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream

    logger.removeHandler(handler)
    log_stream.close()


@pytest.fixture(autouse=True)
def user_config(tmp_path_factory):
    """Isolated settings file with a commit identity."""
    config_file = tmp_path_factory.mktemp("config") / "vcsclient.cfg"
    config = ConfigAccessor(config_file)
    config.set("user", "name", "Test User")
    config.set("user", "email", "test@example.com")
    config.save()
    with patch("vcsclient.config.config", config):
        yield config


@pytest.fixture
def registry():
    """A registry private to one test."""
    return MemoryRegistry()


@pytest.fixture
def remote_repo(tmp_path) -> str:
    """Bare repository with a single commit containing README.md."""
    source = tmp_path / "source"
    source.mkdir()
    with porcelain.init(str(source)) as repo:
        (source / README).write_text(README_CONTENT)
        porcelain.add(repo, paths=[str(source / README)])
        porcelain.commit(
            repo, message=b"Initial commit", author=IDENTITY, committer=IDENTITY
        )

    remote = tmp_path / "remote.git"
    porcelain.clone(str(source), str(remote), bare=True).close()
    return str(remote)


@pytest.fixture
def local_path(tmp_path) -> Path:
    return tmp_path / "local"


@pytest.fixture
def local_client(local_path, remote_repo, registry) -> GitClient:
    """Disk-backed client cloned from remote_repo."""
    return GitClient(
        with_path(str(local_path)),
        with_remote_url(remote_repo),
        registry=registry,
    )
