"""User settings for vcsclient, read from an INI file in the XDG config dir."""

import configparser
import logging
import os
import platform
from typing import Optional, Any

from pathlib import Path

APP_NAME = "vcsclient"

logger = logging.getLogger(__name__)

_home = os.path.expanduser("~")

xdg_config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(_home, ".config")

if platform.system() == "Darwin":
    # macOS
    config_dir = Path("~/Library/Application Support/vcsclient").expanduser()
else:
    # Linux or others
    config_dir = Path(os.path.join(xdg_config_home, APP_NAME))


def get_config_file() -> Path:
    return Path(os.environ.get("VCSCLIENT_CONFIG") or config_dir / f"{APP_NAME}.cfg")


class ConfigAccessor:
    """
    A dict-like accessor for the vcsclient settings file.

    Missing files, sections and keys are not errors: lookups fall back to the
    given default.

    Usage:
        config = ConfigAccessor()
        name = config.get("user", "name", default="vcsclient")
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Args:
            config_path: Path to the settings file. If None, uses the default path.
        """
        if config_path is None:
            self.config_path = get_config_file()
        else:
            self.config_path = Path(config_path)

        self.config = configparser.ConfigParser()
        if self.config_path.exists():
            self.config.read(self.config_path)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        try:
            return self.config[section][key]
        except (KeyError, configparser.NoSectionError, configparser.NoOptionError):
            return default

    def set(self, section: str, key: str, value: str) -> None:
        if not self.config.has_section(section):
            self.config.add_section(section)

        self.config[section][key] = value

    def save(self) -> None:
        """
        Save the current settings to the settings file.

        Fails gracefully if the file cannot be written (e.g., read-only filesystem).
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w") as configfile:
                self.config.write(configfile)
        except (OSError, IOError) as e:
            logger.warning(
                f"Could not save configuration to {self.config_path}: {e}. "
                "Configuration changes will not persist."
            )


# Global settings accessor
config = ConfigAccessor()


def get_commit_identity() -> Optional[bytes]:
    """
    Get the identity used as author and committer of new commits.

    Reads ``name`` and ``email`` from the ``[user]`` section of the settings
    file. When either is missing, None is returned and dulwich falls back to
    the git config / environment / system user.

    Returns:
        Identity formatted as ``b"Name <email>"``, or None
    """
    name = config.get("user", "name")
    email = config.get("user", "email")
    if not name or not email:
        return None
    return f"{name} <{email}>".encode("utf-8")
