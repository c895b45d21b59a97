"""Pydantic model holding a fully resolved client configuration."""

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from vcsclient.constants import AuthType, ResetMode
from vcsclient.errors import InvalidOptionsError, InvalidRepoPathError


def normalize_repo_path(path) -> str:
    """Return *path* as an absolute, user-expanded string path."""
    if path is None:
        raise InvalidRepoPathError(path, "path is required")
    path = os.fspath(path)
    if isinstance(path, bytes):
        path = os.fsdecode(path)
    if not path or not path.strip():
        raise InvalidRepoPathError(path, "path must be a non-empty string")
    if "\x00" in path:
        raise InvalidRepoPathError(path, "path contains a null byte")
    try:
        return os.path.abspath(os.path.expanduser(path))
    except (OSError, ValueError) as e:
        raise InvalidRepoPathError(path, str(e)) from e


class ClientConfiguration(BaseModel):
    """Validated settings of a GitClient."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Absolute repository path or memory key")
    remote_url: Optional[str] = Field(None, description="Remote to clone/push")
    is_mem: bool = Field(False, description="Keep the repository in memory")
    auth_type: AuthType = Field(AuthType.NONE, description="Credential mechanism")
    username: Optional[str] = Field(None, description="HTTP or SSH user")
    password: Optional[str] = Field(None, description="HTTP password")
    private_key: Optional[bytes] = Field(
        None, description="SSH private key material"
    )
    private_key_path: Optional[str] = Field(
        None, description="Path to an SSH private key file"
    )
    reset_mode: ResetMode = Field(ResetMode.HARD, description="Default reset mode")

    @field_validator("path", mode="before")
    @classmethod
    def validate_path(cls, v) -> str:
        return normalize_repo_path(v)

    @field_validator("remote_url")
    @classmethod
    def validate_remote_url(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_credentials(self) -> "ClientConfiguration":
        if self.auth_type == AuthType.HTTP:
            if not self.username or not self.password:
                raise InvalidOptionsError(
                    "http auth requires a non-empty username and password"
                )
        elif self.auth_type == AuthType.SSH:
            has_key = self.private_key is not None and len(self.private_key) > 0
            has_key_path = bool(self.private_key_path)
            if has_key == has_key_path:
                raise InvalidOptionsError(
                    "ssh auth requires exactly one of private key or private key path"
                )
        return self

    def __repr__(self) -> str:
        fields = self.model_dump(exclude={"password", "private_key"})
        args = ", ".join(f"{k}={v!r}" for k, v in fields.items())
        return f"ClientConfiguration({args})"
