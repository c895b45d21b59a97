"""
Exception classes for vcsclient.

Validation errors raised while resolving options or opening a repository all
derive from VCSError. Errors coming from the git engine (dulwich) are never
wrapped and reach the caller unchanged.
"""


class VCSError(Exception):
    """Base exception for all vcsclient errors."""

    pass


class InvalidArgsLengthError(VCSError):
    """Raised when an option is given the wrong number of values."""

    def __init__(self, option: str, expected: int, got: int):
        self.option = option
        self.expected = expected
        self.got = got
        super().__init__(
            f"invalid arguments length for option '{option}': "
            f"expected {expected}, got {got}"
        )


class UnsupportedTypeError(VCSError):
    """Raised when an option value has a type the option cannot accept."""

    def __init__(self, option: str, value):
        self.option = option
        self.value = value
        super().__init__(
            f"unsupported type for option '{option}': {type(value).__name__}"
        )


class InvalidAuthTypeError(VCSError):
    """Raised when the auth type is not one of none, http or ssh."""

    def __init__(self, auth_type):
        self.auth_type = auth_type
        super().__init__(f"invalid auth type: {auth_type!r}")


class InvalidOptionsError(VCSError):
    """Raised when the options are inconsistent with each other."""

    pass


class RepoAlreadyExistsError(VCSError):
    """Raised when a clone targets a directory that already has content."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"repo already exists: {path}")


class InvalidRepoPathError(VCSError):
    """Raised when the repository path is missing or unusable."""

    def __init__(self, path, reason: str = ""):
        self.path = path
        if reason:
            super().__init__(f"invalid repo path {path!r}: {reason}")
        else:
            super().__init__(f"invalid repo path {path!r}")


class DetachedHeadError(VCSError):
    """Raised when the current branch is requested while HEAD is detached."""

    def __init__(self, commit: str):
        self.commit = commit
        super().__init__(f"HEAD is detached at {commit}")


class RepositoryDisposedError(VCSError):
    """Raised when a client is used after its repository was disposed."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"repository at {path} has been disposed")
