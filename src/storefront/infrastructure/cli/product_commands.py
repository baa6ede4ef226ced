"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.list_products import ListProductsHandler
from storefront.application.set_stock import SetStockHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import settings, unit_of_work


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
def product_add(name: str, price: str, stock: int) -> None:
    """Add a new product to the catalog."""
    config = settings()
    handler = AddProductHandler(uow=unit_of_work(config), currency=config.currency)

    try:
        product = handler.handle(name=name, price=price, stock=stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product {product.id} '{product.name}' added at {product.price} "
        f"({product.stock_quantity} in stock)"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    lines = ListProductsHandler(uow=unit_of_work()).handle()

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<36}  {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 77)
    for p in lines:
        click.echo(f"{p.id:<36}  {p.name:<20} {p.price:>10} {p.stock_quantity:>7}")


@click.command("update")
@click.option("--product", "product_ref", required=True, help="Product ID or name.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
def product_update(product_ref: str, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(uow=unit_of_work())

    try:
        handler.handle(product_ref=product_ref, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product_ref}' price updated to {price}")


@click.command("stock")
@click.option("--product", "product_ref", required=True, help="Product ID or name.")
@click.option("--quantity", required=True, type=int, help="Total quantity in stock.")
def product_stock(product_ref: str, quantity: int) -> None:
    """Set the stock level for a product."""
    handler = SetStockHandler(uow=unit_of_work())

    try:
        handler.handle(product_ref=product_ref, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{product_ref}' set to {quantity}")
