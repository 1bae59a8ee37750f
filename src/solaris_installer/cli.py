"""Top-level Click group for the solaris CLI."""

import click

from solaris_installer.new_cmd.cli import new_cmd


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Show each command batch before it runs")
@click.pass_context
def main(ctx, verbose):
    """solaris - create Solaris applications."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


main.add_command(new_cmd)
