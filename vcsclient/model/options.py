"""
Named options used to build a ClientConfiguration.

Options are small values created by the ``with_*`` helpers and applied in
order by :func:`resolve_config`. Every option knows how many values it takes
and which types it accepts, so a malformed option fails with a dedicated
error before the configuration model is validated:

    config = resolve_config(
        with_path("/tmp/repo"),
        with_remote_url("https://example.org/repo.git"),
        with_auth_type(AuthType.HTTP),
        with_username("alice"),
        with_password("secret"),
    )
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from pydantic import ValidationError

from vcsclient.constants import AuthType, ResetMode
from vcsclient.errors import (
    InvalidArgsLengthError,
    InvalidAuthTypeError,
    InvalidOptionsError,
    InvalidRepoPathError,
    UnsupportedTypeError,
)
from .config import ClientConfiguration

logger = logging.getLogger(__name__)


def _to_str(value) -> str:
    return os.fspath(value)


def _to_bytes(value) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _to_auth_type(value) -> AuthType:
    if isinstance(value, AuthType):
        return value
    try:
        return AuthType(value.strip().lower())
    except ValueError:
        raise InvalidAuthTypeError(value)


def _to_reset_mode(value) -> ResetMode:
    if isinstance(value, ResetMode):
        return value
    try:
        return ResetMode(value.strip().lower())
    except ValueError:
        raise InvalidOptionsError(f"invalid reset mode: {value!r}")


@dataclass(frozen=True)
class _OptionDef:
    field: str
    arity: int
    types: Tuple[type, ...]
    convert: Optional[Callable[[Any], Any]] = None


_OPTIONS: Dict[str, _OptionDef] = {
    "path": _OptionDef("path", 1, (str, os.PathLike), _to_str),
    "remote_url": _OptionDef("remote_url", 1, (str,)),
    "is_mem": _OptionDef("is_mem", 0, ()),
    "auth_type": _OptionDef("auth_type", 1, (AuthType, str), _to_auth_type),
    "username": _OptionDef("username", 1, (str,)),
    "password": _OptionDef("password", 1, (str,)),
    "private_key": _OptionDef("private_key", 1, (bytes, bytearray, str), _to_bytes),
    "private_key_path": _OptionDef(
        "private_key_path", 1, (str, os.PathLike), _to_str
    ),
    "mode": _OptionDef("reset_mode", 1, (ResetMode, str), _to_reset_mode),
}


class Option:
    """A single named configuration option and its values."""

    __slots__ = ("name", "values")

    def __init__(self, name: str, *values):
        self.name = name
        self.values = values

    def apply(self, fields: Dict[str, Any]) -> None:
        """
        Check this option and write its value into *fields*.

        Raises:
            InvalidOptionsError: If the option name is unknown
            InvalidArgsLengthError: If the number of values is wrong
            UnsupportedTypeError: If a value has the wrong type
            InvalidAuthTypeError: If an auth type value is not recognized
        """
        definition = _OPTIONS.get(self.name)
        if definition is None:
            raise InvalidOptionsError(f"unknown option: {self.name!r}")
        if len(self.values) != definition.arity:
            raise InvalidArgsLengthError(self.name, definition.arity, len(self.values))

        if definition.arity == 0:
            fields[definition.field] = True
            return

        value = self.values[0]
        # bool is an int subclass; no option takes one as a value
        if isinstance(value, bool) or not isinstance(value, definition.types):
            raise UnsupportedTypeError(self.name, value)
        if definition.convert is not None:
            value = definition.convert(value)
        fields[definition.field] = value

    def __repr__(self) -> str:
        if self.name in ("password", "private_key"):
            return f"Option({self.name!r}, '***')"
        args = ", ".join(repr(v) for v in (self.name, *self.values))
        return f"Option({args})"


def with_path(*args) -> Option:
    return Option("path", *args)


def with_remote_url(*args) -> Option:
    return Option("remote_url", *args)


def with_is_mem(*args) -> Option:
    """Keep the repository in process memory instead of on disk."""
    return Option("is_mem", *args)


def with_auth_type(*args) -> Option:
    return Option("auth_type", *args)


def with_username(*args) -> Option:
    return Option("username", *args)


def with_password(*args) -> Option:
    return Option("password", *args)


def with_private_key(*args) -> Option:
    """SSH private key given as PEM/OpenSSH text or bytes."""
    return Option("private_key", *args)


def with_private_key_path(*args) -> Option:
    return Option("private_key_path", *args)


def with_mode(*args) -> Option:
    """Reset mode, used by GitClient.reset()."""
    return Option("mode", *args)


def apply_options(options, fields: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Apply *options* in order onto a (copied) field dict and return it."""
    fields = dict(fields or {})
    for option in options:
        if not isinstance(option, Option):
            raise UnsupportedTypeError("option", option)
        option.apply(fields)
    return fields


def resolve_config(*options: Option) -> ClientConfiguration:
    """
    Build and validate a ClientConfiguration from named options.

    Options are applied left to right; when the same option is given twice the
    last one wins. Nothing is read from or written to disk.

    Args:
        *options: Options created by the ``with_*`` helpers

    Returns:
        The validated configuration

    Raises:
        InvalidRepoPathError: If no usable path was given
        InvalidOptionsError: If credentials do not match the auth type
        InvalidArgsLengthError, UnsupportedTypeError, InvalidAuthTypeError:
            If an individual option is malformed
    """
    fields = apply_options(options)

    if "path" not in fields:
        raise InvalidRepoPathError(None, "path is required")

    try:
        config = ClientConfiguration(**fields)
    except ValidationError as e:
        raise InvalidOptionsError(str(e)) from e

    logger.debug(f"Resolved configuration: {config!r}")
    return config
