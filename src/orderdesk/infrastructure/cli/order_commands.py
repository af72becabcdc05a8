"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from orderdesk.application.create_order import CreateOrderHandler
from orderdesk.application.dto import OrderDTO, OrderItemSpec
from orderdesk.application.list_orders import ListOrdersHandler
from orderdesk.application.show_order import ShowOrderHandler
from orderdesk.domain.exceptions import DomainException
from orderdesk.infrastructure.bootstrap import order_repository, product_repository
from orderdesk.infrastructure.config import Settings


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:3,2:5' (product ID:quantity) into an OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        id_str, qty_str = pair.split(":", 1)
        try:
            product_id = int(id_str)
        except ValueError:
            raise click.BadParameter(f"Invalid product ID '{id_str}'.")
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product #{product_id}."
            )
        specs.append(OrderItemSpec(product_id=product_id, quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name} <{dto.customer_email}>")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    if dto.discount_applied:
        click.echo(f"  {'Subtotal':<27} {dto.subtotal:>20}")
        click.echo(f"  {'Variety discount':<27} {'-' + dto.discount:>20}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("create")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--email", required=True, help="Customer email.")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
@click.pass_obj
def order_create(settings: Settings, customer: str, email: str, items: str) -> None:
    """Place a new order (deducts stock)."""
    specs = _parse_items(items)

    handler = CreateOrderHandler(
        order_repo=order_repository(settings),
        product_repo=product_repository(settings),
    )

    try:
        dto = handler.handle(customer_name=customer, customer_email=email, item_specs=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(settings: Settings, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository(settings))

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.pass_obj
def order_list(settings: Settings) -> None:
    """List all orders."""
    orders = ListOrdersHandler(order_repo=order_repository(settings)).handle()

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Customer':<20} {'Items':>5} {'Status':<10} {'Total':>10}")
    click.echo("-" * 55)
    for dto in orders:
        click.echo(
            f"{dto.id:<6} {dto.customer_name:<20} {len(dto.items):>5} {dto.status:<10} {dto.total:>10}"
        )
