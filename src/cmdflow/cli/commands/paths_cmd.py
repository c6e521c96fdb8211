"""`cmdflow paths`: manage persisted command path overrides."""

from dataclasses import replace

import click

from cmdflow.cli.context import CmdflowContext
from cmdflow.core.paths import (
    all_command_paths,
    clear_command_path,
    reset_command_paths,
    resolve_command_path,
    set_command_path,
)


@click.group("paths")
def paths_group() -> None:
    """Manage command path overrides."""


@paths_group.command("list")
@click.pass_obj
def list_paths(ctx: CmdflowContext) -> None:
    """List active overrides."""
    overrides = all_command_paths()
    if not overrides:
        click.echo("No command path overrides.", err=True)
        return

    for name, path in overrides.items():
        click.echo(f"{name} = {path}")


@paths_group.command("set")
@click.argument("name")
@click.argument("path")
@click.pass_obj
def set_path(ctx: CmdflowContext, name: str, path: str) -> None:
    """Route NAME to PATH for every future run."""
    try:
        set_command_path(name, path)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    config = ctx.config_ops.load_or_default()
    command_paths = dict(config.command_paths)
    command_paths[name] = path
    ctx.config_ops.save(replace(config, command_paths=command_paths))
    click.echo(f"Set {name} = {path}", err=True)


@paths_group.command("clear")
@click.argument("name")
@click.pass_obj
def clear_path(ctx: CmdflowContext, name: str) -> None:
    """Remove the override for NAME."""
    clear_command_path(name)

    config = ctx.config_ops.load_or_default()
    if name not in config.command_paths:
        click.echo(f"No override for {name}", err=True)
        return

    command_paths = {key: value for key, value in config.command_paths.items() if key != name}
    ctx.config_ops.save(replace(config, command_paths=command_paths))
    click.echo(f"Cleared {name}", err=True)


@paths_group.command("reset")
@click.pass_obj
def reset_paths(ctx: CmdflowContext) -> None:
    """Remove every override."""
    reset_command_paths()

    config = ctx.config_ops.load_or_default()
    if config.command_paths:
        ctx.config_ops.save(replace(config, command_paths={}))
    click.echo("Cleared all command path overrides", err=True)


@paths_group.command("resolve")
@click.argument("name")
def resolve_path(name: str) -> None:
    """Print what NAME resolves to."""
    click.echo(resolve_command_path(name))
