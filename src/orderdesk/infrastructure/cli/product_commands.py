"""CLI commands for the Product catalog."""

from __future__ import annotations

import click

from orderdesk.application.add_product import AddProductHandler
from orderdesk.application.list_products import ListProductsHandler
from orderdesk.application.set_stock import SetStockHandler
from orderdesk.domain.exceptions import DomainException
from orderdesk.infrastructure.bootstrap import product_repository
from orderdesk.infrastructure.config import Settings


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.pass_obj
def product_add(settings: Settings, name: str, price: str, stock: int) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository(settings))

    try:
        product = handler.handle(name=name, price=price, stock=stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.stock} in stock)"
    )


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the catalog."""
    products = ListProductsHandler(product_repo=product_repository(settings)).handle()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 46)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {str(p.price):>10} {p.stock:>7}")


@click.command("stock")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New stock level.")
@click.pass_obj
def product_stock(settings: Settings, product_id: int, quantity: int) -> None:
    """Set a product's stock level."""
    handler = SetStockHandler(product_repo=product_repository(settings))

    try:
        product = handler.handle(product_id=product_id, stock=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} stock set to {product.stock}")
