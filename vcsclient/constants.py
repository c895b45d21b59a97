from enum import Enum


class AuthType(str, Enum):
    """Credential mechanism used against the remote."""

    NONE = "none"
    HTTP = "http"
    SSH = "ssh"


class ResetMode(str, Enum):
    """Scope of a reset: branch pointer, plus index, plus working tree."""

    SOFT = "soft"
    MIXED = "mixed"
    HARD = "hard"


class Backend(str, Enum):
    """Where a repository keeps its objects and working tree."""

    DISK = "disk"
    MEMORY = "memory"


DEFAULT_BRANCH = b"refs/heads/master"
DEFAULT_REMOTE = "origin"
