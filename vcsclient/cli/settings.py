"""CLI commands for the vcsclient settings file"""

import click

from vcsclient import config as settings
from vcsclient.cli.utils.logging import logger


@click.command("identity")
@click.option("--name", default=None, help="Author name for new commits.")
@click.option("--email", default=None, help="Author email for new commits.")
def identity(name, email):
    """Show the commit identity, or store a new one in the settings file."""
    accessor = settings.config
    if name:
        accessor.set("user", "name", name)
    if email:
        accessor.set("user", "email", email)
    if name or email:
        accessor.save()
        logger.info(f"Saved settings to {accessor.config_path}")

    current = settings.get_commit_identity()
    click.echo(current.decode("utf-8") if current else "(not set)")
