from __future__ import annotations

import logging
import shlex
from pathlib import Path

import click

from pillbox.application.command import Command
from pillbox.application.exit import ExitCommand
from pillbox.application.help import HelpCommand
from pillbox.domain.exceptions import DomainException
from pillbox.infrastructure import bootstrap
from pillbox.infrastructure.bootstrap import Session
from pillbox.infrastructure.cli.item_commands import item_add, item_delete, item_list
from pillbox.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_fulfill,
    order_list,
    order_show,
)


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=bootstrap.DATA_DIR_ENVVAR,
    default=None,
    help="Directory holding items.json and orders.json.",
)
@click.option("--verbose", is_flag=True, default=False, help="Log debug output.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, verbose: bool) -> None:
    """Pillbox — stock room inventory"""
    if ctx.obj is not None:
        # Re-entered from the shell with the session already open
        if verbose:
            logging.getLogger().setLevel(logging.DEBUG)
        return

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = bootstrap.session(data_dir)
    except DomainException as exc:
        raise click.ClickException(str(exc))


@cli.group()
def item() -> None:
    """Manage stocked items."""


@cli.group()
def order() -> None:
    """Manage purchase and dispense orders."""


@cli.command("help")
@click.argument("topic", required=False)
@click.pass_obj
def help_(session: Session, topic: str | None) -> HelpCommand:
    """Show help for a command."""
    command = HelpCommand(topic=topic)
    for line in command.execute(session.ledger, session.storage).lines:
        click.echo(line)
    return command


@cli.command("exit")
def exit_() -> ExitCommand:
    """Leave the interactive shell."""
    return ExitCommand()


@cli.command("shell")
@click.pass_obj
def shell(session: Session) -> None:
    """Run commands interactively against one loaded inventory."""
    click.echo("Pillbox shell. Type 'help' for commands, 'exit' to leave.")
    while True:
        try:
            line = click.prompt("pillbox", default="", show_default=False, prompt_suffix="> ")
        except click.Abort:
            click.echo()
            break

        try:
            args = shlex.split(line)
        except ValueError as exc:
            click.echo(f"Error: {exc}", err=True)
            continue
        if not args:
            continue
        if args[0] == "shell":
            click.echo("Error: already in the shell", err=True)
            continue

        try:
            result = cli.main(args, prog_name="pillbox", obj=session, standalone_mode=False)
        except click.ClickException as exc:
            exc.show()
            continue

        if isinstance(result, Command) and result.is_exit():
            break


# Register subcommands
item.add_command(item_add)
item.add_command(item_delete)
item.add_command(item_list)
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_fulfill)
order.add_command(order_list)
order.add_command(order_show)
