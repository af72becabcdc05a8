from pathlib import Path

import click

from orderdesk.infrastructure.cli.order_commands import order_create, order_list, order_show
from orderdesk.infrastructure.cli.product_commands import product_add, product_list, product_stock
from orderdesk.infrastructure.config import (
    DATA_DIR_ENV,
    DEFAULT_DATA_DIR,
    DEFAULT_LOG_LEVEL,
    LOG_LEVEL_ENV,
    Settings,
)
from orderdesk.infrastructure.logging_setup import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_DATA_DIR,
    envvar=DATA_DIR_ENV,
    show_default=True,
    show_envvar=True,
    help="Directory holding products.json and orders.json.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=DEFAULT_LOG_LEVEL,
    envvar=LOG_LEVEL_ENV,
    show_default=True,
    show_envvar=True,
    help="Logging verbosity.",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, log_level: str) -> None:
    """orderdesk — order creation with stock bookkeeping"""
    configure_logging(log_level)
    ctx.obj = Settings(data_dir=data_dir, log_level=log_level.upper())


@cli.group()
def order() -> None:
    """Place and inspect orders."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_stock)
