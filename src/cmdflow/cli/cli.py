import logging

import click

from cmdflow.cli.commands.paths_cmd import paths_group
from cmdflow.cli.commands.run_cmd import run_cmd
from cmdflow.cli.context import create_context
from cmdflow.core.config import apply_config

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="cmdflow")
@click.option("--debug", is_flag=True, help="Show debug output.")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Build and run command pipelines."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()

    try:
        config = ctx.obj.config_ops.load_or_default()
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    apply_config(config)


cli.add_command(paths_group)
cli.add_command(run_cmd)


def main() -> None:
    """CLI entry point used by the `cmdflow` console script."""
    cli()
