"""
Unit tests for the ConfigAccessor class and commit identity lookup.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from vcsclient.config import ConfigAccessor, get_commit_identity, get_config_file


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "vcsclient.cfg"
    path.write_text(
        """
[user]
name = Jane Doe
email = jane@example.org

[other]
key = value
"""
    )
    return path


@pytest.mark.short
def test_config_accessor_get_existing(config_file):
    config = ConfigAccessor(config_file)

    assert config.get("user", "name") == "Jane Doe"
    assert config.get("other", "key") == "value"


@pytest.mark.short
def test_config_accessor_get_missing_with_default(config_file):
    config = ConfigAccessor(config_file)

    assert config.get("user", "missing", default="x") == "x"
    assert config.get("missing", "key") is None


@pytest.mark.short
def test_config_accessor_missing_file(tmp_path):
    config = ConfigAccessor(tmp_path / "nope.cfg")

    assert config.get("user", "name") is None
    assert not config.config.has_section("user")


@pytest.mark.short
def test_config_accessor_set_and_save(tmp_path):
    """Saving creates missing parent directories."""
    path = tmp_path / "nested" / "dir" / "vcsclient.cfg"
    config = ConfigAccessor(path)
    config.set("user", "name", "Saved User")
    config.save()

    reloaded = ConfigAccessor(path)
    assert reloaded.get("user", "name") == "Saved User"


@pytest.mark.short
def test_config_accessor_save_failure_is_logged(tmp_path, capture_logs):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    config = ConfigAccessor(blocker / "vcsclient.cfg")
    config.set("user", "name", "Nobody")

    config.save()

    assert "Could not save configuration" in capture_logs.getvalue()


@pytest.mark.short
def test_config_file_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "custom.cfg"
    monkeypatch.setenv("VCSCLIENT_CONFIG", str(path))

    assert get_config_file() == Path(path)


@pytest.mark.short
def test_commit_identity(config_file):
    with patch("vcsclient.config.config", ConfigAccessor(config_file)):
        assert get_commit_identity() == b"Jane Doe <jane@example.org>"


@pytest.mark.short
def test_commit_identity_incomplete(tmp_path):
    config = ConfigAccessor(tmp_path / "vcsclient.cfg")
    config.set("user", "name", "No Email")
    with patch("vcsclient.config.config", config):
        assert get_commit_identity() is None
