"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.create_order import CreateOrderFromCartHandler
from storefront.application.dto import OrderCreateData, OrderDTO
from storefront.application.list_orders import DEFAULT_PER_PAGE, ListUserOrdersHandler
from storefront.application.order_statistics import OrderStatisticsHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.show_status_history import ShowStatusHistoryHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus
from storefront.infrastructure.bootstrap import settings, unit_of_work


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number}  (status={dto.status})")
    click.echo(f"ID:       {dto.id}")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.shipped_at:
        click.echo(f"Shipped:  {dto.shipped_at}")
    if dto.delivered_at:
        click.echo(f"Delivered: {dto.delivered_at}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} "
            f"{item.unit_price_display:>10} {item.total_price_display:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total_display:>20}")


@click.command("create")
@click.option("--user", "user_id", required=True, help="User placing the order.")
@click.option("--address", required=True, help="Shipping address.")
@click.option("--notes", default=None, help="Optional order notes.")
def order_create(user_id: str, address: str, notes: str | None) -> None:
    """Place an order for everything in the user's cart."""
    config = settings()
    handler = CreateOrderFromCartHandler(
        uow=unit_of_work(config),
        minimum_order_amount=config.minimum_order_total,
    )

    try:
        dto = handler.handle(user_id, OrderCreateData(shipping_address=address, notes=notes))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Order created.")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", default=None, help="Order ID to display.")
@click.option("--number", "order_number", default=None, help="Order number, e.g. ORD-20250820-1A2B3C4D.")
def order_show(order_id: str | None, order_number: str | None) -> None:
    """Show details of an existing order."""
    if not order_id and not order_number:
        raise click.UsageError("Pass either --id or --number")

    handler = ShowOrderHandler(uow=unit_of_work())

    try:
        if order_id:
            dto = handler.handle(order_id)
        else:
            dto = handler.handle_by_number(order_number)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", required=True, help="User whose orders to list.")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--per-page", default=DEFAULT_PER_PAGE, show_default=True, type=int)
def order_list(user_id: str, page: int, per_page: int) -> None:
    """List a user's orders, newest first."""
    handler = ListUserOrdersHandler(uow=unit_of_work())

    try:
        result = handler.handle(user_id, page=page, per_page=per_page)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<22} {'Status':<11} {'Total':>12}  Created")
    click.echo("-" * 66)
    for dto in result.items:
        click.echo(
            f"{dto.order_number:<22} {dto.status:<11} {dto.total_display:>12}  {dto.created_at}"
        )
    click.echo(f"Page {result.page}, {len(result.items)} of {result.total} orders")


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option(
    "--to",
    "target",
    required=True,
    type=click.Choice([s.value for s in OrderStatus]),
    help="New status.",
)
@click.option("--by", "actor_id", default=None, help="Who is making the change.")
@click.option("--notes", default=None, help="Note for the status history.")
def order_status(order_id: str, target: str, actor_id: str | None, notes: str | None) -> None:
    """Move an order to a new status."""
    handler = UpdateOrderStatusHandler(uow=unit_of_work())

    try:
        dto = handler.handle(order_id, target, actor_id=actor_id, notes=notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} is now {dto.status_label}.")


@click.command("history")
@click.option("--id", "order_id", required=True, help="Order ID.")
def order_history(order_id: str) -> None:
    """Show the status history of an order."""
    handler = ShowStatusHistoryHandler(uow=unit_of_work())

    try:
        entries = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{'When':<22} {'From':<11} {'To':<11} {'By':<20} Notes")
    click.echo("-" * 80)
    for entry in entries:
        click.echo(
            f"{entry.at:<22} {entry.old_status or '-':<11} {entry.new_status:<11} "
            f"{entry.changed_by or 'system':<20} {entry.notes or ''}"
        )


@click.command("stats")
def order_stats() -> None:
    """Show order counts per status."""
    stats = OrderStatisticsHandler(uow=unit_of_work()).handle()

    for status, count in stats.by_status.items():
        click.echo(f"{status:<12} {count:>6}")
    click.echo("-" * 19)
    click.echo(f"{'total':<12} {stats.total:>6}")
