"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from pillbox.application.cancel_order import CancelOrderCommand
from pillbox.application.command import Command
from pillbox.application.create_order import CreateOrderCommand
from pillbox.application.dto import OrderDTO, OrderItemSpec
from pillbox.application.fulfill_order import FulfillOrderCommand
from pillbox.application.list_orders import ListOrdersCommand
from pillbox.application.show_order import ShowOrderCommand
from pillbox.domain.exceptions import DomainException
from pillbox.domain.model.order import OrderStatus, OrderType
from pillbox.infrastructure.bootstrap import Session


def _parse_items(raw: str) -> tuple[OrderItemSpec, ...]:
    """Parse 'gauze:100,tape:5' into OrderItemSpec tuple."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ItemName:Quantity'."
            )
        name, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for item '{name}'."
            )
        specs.append(OrderItemSpec(item_name=name.strip(), quantity=qty))
    return tuple(specs)


def _run(session: Session, command: Command) -> object:
    try:
        return command.execute(session.ledger, session.storage)
    except DomainException as exc:
        raise click.ClickException(str(exc))


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  ({dto.type}, status={dto.status})")
    click.echo(f"Created:   {dto.created_at}")
    if dto.fulfilled_at is not None:
        click.echo(f"Fulfilled: {dto.fulfilled_at}")
    if dto.notes:
        click.echo(f"Notes:     {dto.notes}")
    click.echo()
    click.echo(f"  {'Item':<30} {'Qty':>8}")
    click.echo(f"  {'-'*39}")
    for line in dto.items:
        click.echo(f"  {line.item_name:<30} {line.quantity:>8}")
    click.echo(f"  {'-'*39}")
    click.echo(f"  {'Total units':<30} {dto.total_quantity:>8}")


@click.command("create")
@click.option(
    "--type", "order_type", required=True,
    type=click.Choice(["purchase", "dispense"], case_sensitive=False),
    help="PURCHASE brings stock in, DISPENSE sends it out.",
)
@click.option("--items", required=True, help="Items as 'Name:Qty,Name:Qty'.")
@click.option("--notes", default="", help="Free-text notes kept with the order.")
@click.pass_obj
def order_create(session: Session, order_type: str, items: str, notes: str) -> CreateOrderCommand:
    """Create a pending purchase or dispense order."""
    command = CreateOrderCommand(
        order_type=OrderType(order_type.upper()),
        items=_parse_items(items),
        notes=notes,
    )
    dto = _run(session, command)

    click.echo(f"Order {dto.id} created  (status={dto.status})")
    return command


@click.command("fulfill")
@click.option("--id", "order_ref", required=True, help="Order ID (or a unique prefix).")
@click.pass_obj
def order_fulfill(session: Session, order_ref: str) -> FulfillOrderCommand:
    """Fulfill a pending order (applies it to stock)."""
    command = FulfillOrderCommand(order_ref=order_ref)
    dto = _run(session, command)

    verb = "received into" if dto.type == OrderType.PURCHASE.value else "dispensed from"
    click.echo(f"Order {dto.id} fulfilled — {dto.total_quantity} units {verb} stock.")
    return command


@click.command("cancel")
@click.option("--id", "order_ref", required=True, help="Order ID (or a unique prefix).")
@click.pass_obj
def order_cancel(session: Session, order_ref: str) -> CancelOrderCommand:
    """Cancel a pending order."""
    command = CancelOrderCommand(order_ref=order_ref)
    dto = _run(session, command)

    click.echo(f"Order {dto.id} cancelled.")
    return command


@click.command("show")
@click.option("--id", "order_ref", required=True, help="Order ID (or a unique prefix).")
@click.pass_obj
def order_show(session: Session, order_ref: str) -> ShowOrderCommand:
    """Show details of an existing order."""
    command = ShowOrderCommand(order_ref=order_ref)
    _display_order(_run(session, command))
    return command


@click.command("list")
@click.option(
    "--status", default=None,
    type=click.Choice([s.value.lower() for s in OrderStatus], case_sensitive=False),
    help="Only show orders in this status.",
)
@click.pass_obj
def order_list(session: Session, status: str | None) -> ListOrdersCommand:
    """List orders, oldest first."""
    command = ListOrdersCommand(status=OrderStatus(status.upper()) if status else None)
    orders = _run(session, command)

    if not orders:
        click.echo("No orders found.")
        return command

    click.echo(f"{'ID':<10} {'Type':<9} {'Status':<10} {'Units':>6}  {'Created':<20}")
    click.echo("-" * 59)
    for dto in orders:
        click.echo(
            f"{dto.id[:8]:<10} {dto.type:<9} {dto.status:<10} "
            f"{dto.total_quantity:>6}  {dto.created_at:<20}"
        )
    return command
