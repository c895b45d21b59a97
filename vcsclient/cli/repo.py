"""CLI commands operating on a git repository"""

import sys
from functools import wraps
from typing import List, Optional

import click

from vcsclient import GitClient
from vcsclient.cli.utils.logging import logger
from vcsclient.constants import AuthType, ResetMode
from vcsclient.errors import VCSError
from vcsclient.model import (
    Option,
    with_auth_type,
    with_mode,
    with_password,
    with_path,
    with_private_key_path,
    with_remote_url,
    with_username,
)

existing_dir = click.Path(exists=True, file_okay=False)


def auth_options(f):
    """Shared --auth-type/--username/--password/--private-key-path options."""

    @click.option(
        "--auth-type",
        type=click.Choice([t.value for t in AuthType], case_sensitive=False),
        default=AuthType.NONE.value,
        show_default=True,
        help="Credential mechanism for the remote.",
    )
    @click.option("--username", "-u", default=None, help="HTTP or SSH username.")
    @click.option(
        "--password",
        default=None,
        envvar="VCSCLIENT_PASSWORD",
        help="HTTP password (or VCSCLIENT_PASSWORD).",
    )
    @click.option(
        "--private-key-path",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="SSH private key file.",
    )
    @wraps(f)
    def wrapper(*args, **kwargs):
        return f(*args, **kwargs)

    return wrapper


def build_options(
    path: str,
    remote_url: Optional[str] = None,
    auth_type: str = AuthType.NONE.value,
    username: Optional[str] = None,
    password: Optional[str] = None,
    private_key_path: Optional[str] = None,
) -> List[Option]:
    options = [with_path(path), with_auth_type(auth_type)]
    if remote_url:
        options.append(with_remote_url(remote_url))
    if username:
        options.append(with_username(username))
    if password:
        options.append(with_password(password))
    if private_key_path:
        options.append(with_private_key_path(private_key_path))
    return options


def open_client(options: List[Option]) -> GitClient:
    try:
        return GitClient(*options)
    except VCSError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


@click.command("clone")
@click.argument("url")
@click.argument("path", type=click.Path(file_okay=False))
@auth_options
def clone(url, path, auth_type, username, password, private_key_path):
    """Clone URL into PATH (opens PATH instead when it is already a repository)."""
    client = open_client(
        build_options(path, url, auth_type, username, password, private_key_path)
    )
    logger.info(f"Repository ready at {client.path}")


@click.command("commit")
@click.argument("path", type=existing_dir)
@click.option("--message", "-m", required=True, help="Commit message.")
def commit(path, message):
    """Stage all changes in PATH and commit them."""
    client = open_client([with_path(path)])
    sha = client.commit_all(message)
    click.echo(sha)


@click.command("checkout")
@click.argument("path", type=existing_dir)
@click.argument("branch")
def checkout(path, branch):
    """Switch PATH to BRANCH, creating it at HEAD if needed."""
    client = open_client([with_path(path)])
    client.checkout_branch(branch)
    logger.info(f"Switched to {client.get_current_branch()}")


@click.command("branch")
@click.argument("path", type=existing_dir)
def branch(path):
    """Print the current branch reference of PATH."""
    client = open_client([with_path(path)])
    try:
        click.echo(client.get_current_branch())
    except VCSError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


@click.command("log")
@click.argument("path", type=existing_dir)
@click.option(
    "--max-count", "-n", type=int, default=None, help="Limit the number of commits."
)
def log(path, max_count):
    """Show the commit log of PATH, most recent first."""
    client = open_client([with_path(path)])
    records = client.get_logs()
    if max_count is not None:
        records = records[:max_count]
    for record in records:
        lines = record.message.strip().splitlines()
        subject = lines[0] if lines else ""
        stamp = record.timestamp.isoformat()
        click.echo(f"{record.short_hash} {stamp} {record.author}  {subject}")


@click.command("reset")
@click.argument("path", type=existing_dir)
@click.option(
    "--mode",
    type=click.Choice([m.value for m in ResetMode], case_sensitive=False),
    default=ResetMode.HARD.value,
    show_default=True,
    help="What to reset besides the branch pointer.",
)
def reset(path, mode):
    """Reset PATH to its HEAD commit."""
    client = open_client([with_path(path)])
    client.reset(with_mode(mode))
    logger.info(f"Reset {client.path} ({mode})")


@click.command("push")
@click.argument("path", type=existing_dir)
@click.option("--remote-url", default=None, help="Push here instead of origin.")
@auth_options
def push(path, remote_url, auth_type, username, password, private_key_path):
    """Push the current branch of PATH."""
    client = open_client(
        build_options(path, remote_url, auth_type, username, password, private_key_path)
    )
    client.push()
    logger.info(f"Pushed {client.get_current_branch()}")
