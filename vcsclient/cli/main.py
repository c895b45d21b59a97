"""vcsclient CLI"""

import click

from vcsclient import __version__
from vcsclient.cli.repo import branch, checkout, clone, commit, log, push, reset
from vcsclient.cli.settings import identity

from .debug import add_debug_option


@click.group()
@click.version_option(__version__, prog_name="vcsclient")
@click.pass_context
def cli(ctx):
    """
    Command line interface to vcsclient git repositories.
    """
    ctx.ensure_object(dict)


for command in (clone, commit, checkout, branch, log, reset, push, identity):
    cli.add_command(add_debug_option(command))

add_debug_option(cli)

if __name__ == "__main__":
    cli(obj={})
