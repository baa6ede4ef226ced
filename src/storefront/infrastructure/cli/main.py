import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import engine, settings
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.order_commands import (
    order_create,
    order_history,
    order_list,
    order_show,
    order_stats,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_stock,
    product_update,
)
from storefront.infrastructure.logging import add_context, configure_logging


@click.group()
def cli() -> None:
    """Storefront: cart checkout and order lifecycle"""
    try:
        config = settings()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    configure_logging(config)
    add_context(environment=config.environment)


@cli.command("init-db")
def init_db() -> None:
    """Create the database tables if they do not exist."""
    config = settings()
    try:
        engine(config.database_url)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Database ready at {config.database_url}")


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def cart() -> None:
    """Manage a user's cart."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_history)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_stats)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_stock)
product.add_command(product_update)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
