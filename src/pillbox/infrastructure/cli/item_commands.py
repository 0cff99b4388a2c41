"""CLI commands for the item ledger."""

from __future__ import annotations

import click

from pillbox.application.add_item import AddItemCommand
from pillbox.application.delete_item import DeleteItemCommand
from pillbox.application.list_items import ListItemsCommand
from pillbox.domain.exceptions import DomainException
from pillbox.infrastructure.bootstrap import Session


@click.command("add")
@click.option("--name", required=True, help="Item name.")
@click.option("--quantity", required=True, type=int, help="Units received into stock.")
@click.pass_obj
def item_add(session: Session, name: str, quantity: int) -> AddItemCommand:
    """Add stock of an item."""
    command = AddItemCommand(name=name, quantity=quantity)

    try:
        dto = command.execute(session.ledger, session.storage)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Added {quantity} of '{dto.name}' (now {dto.quantity} in stock)")
    return command


@click.command("delete")
@click.option("--name", required=True, help="Item name.")
@click.option(
    "--quantity", type=int, default=None,
    help="Units to remove. Omit to remove the item entirely.",
)
@click.pass_obj
def item_delete(session: Session, name: str, quantity: int | None) -> DeleteItemCommand:
    """Remove stock of an item, or the whole item."""
    command = DeleteItemCommand(name=name, quantity=quantity)

    try:
        dto = command.execute(session.ledger, session.storage)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if quantity is None:
        click.echo(f"Deleted '{dto.name}' from the inventory")
    else:
        click.echo(f"Removed {quantity} of '{dto.name}' (now {dto.quantity} in stock)")
    return command


@click.command("list")
@click.pass_obj
def item_list(session: Session) -> ListItemsCommand:
    """List all items in stock."""
    command = ListItemsCommand()
    items = command.execute(session.ledger, session.storage)

    if not items:
        click.echo("The inventory is empty.")
        return command

    click.echo(f"{'Item':<30} {'Quantity':>10}")
    click.echo("-" * 41)
    for item in items:
        click.echo(f"{item.name:<30} {item.quantity:>10}")
    return command
