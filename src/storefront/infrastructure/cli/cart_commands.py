"""CLI commands for a user's cart."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.dto import CartDTO
from storefront.application.remove_from_cart import ClearCartHandler, RemoveFromCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import unit_of_work


def _display_cart(dto: CartDTO) -> None:
    if not dto.items:
        click.echo(f"Cart of {dto.user_id} is empty.")
        return

    click.echo(f"Cart of {dto.user_id}")
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} "
            f"{item.unit_price_display:>10} {item.total_price_display:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Cart Total':<27} {dto.total_display:>20}")


@click.command("add")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--product", "product_ref", required=True, help="Product ID or name.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
def cart_add(user_id: str, product_ref: str, quantity: int) -> None:
    """Add a product to the cart."""
    try:
        dto = AddToCartHandler(uow=unit_of_work()).handle(user_id, product_ref, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("update")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--product", "product_ref", required=True, help="Product ID or name.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
def cart_update(user_id: str, product_ref: str, quantity: int) -> None:
    """Change the quantity of a product in the cart."""
    try:
        dto = UpdateCartItemHandler(uow=unit_of_work()).handle(user_id, product_ref, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("remove")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--product", "product_ref", required=True, help="Product ID or name.")
def cart_remove(user_id: str, product_ref: str) -> None:
    """Remove a product from the cart."""
    try:
        dto = RemoveFromCartHandler(uow=unit_of_work()).handle(user_id, product_ref)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("show")
@click.option("--user", "user_id", required=True, help="User ID.")
def cart_show(user_id: str) -> None:
    """Show the cart."""
    _display_cart(ShowCartHandler(uow=unit_of_work()).handle(user_id))


@click.command("clear")
@click.option("--user", "user_id", required=True, help="User ID.")
def cart_clear(user_id: str) -> None:
    """Remove every item from the cart."""
    ClearCartHandler(uow=unit_of_work()).handle(user_id)
    click.echo(f"Cart of {user_id} cleared.")
