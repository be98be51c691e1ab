"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import CreateOrderRequest, OrderDTO, OrderItemSpec
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_payment_status import UpdatePaymentStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus, PaymentMethod, PaymentStatus
from storefront.domain.model.value_objects import CustomerDetails, DeliveryAddress
from storefront.infrastructure.bootstrap import order_repository, product_repository

ORDER_STATUSES = [s.value for s in OrderStatus]
PAYMENT_STATUSES = [s.value for s in PaymentStatus]
PAYMENT_METHODS = [m.value for m in PaymentMethod]


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'ID:2,ID:1' into OrderItemSpec list.

    Quantities are passed through as text; pricing decides if they are valid.
    """
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty = pair.rsplit(":", 1)
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty.strip()))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.reference_number}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"ID:       {dto.id}")
    click.echo(f"Customer: {dto.customer_name} <{dto.email}>")
    click.echo(f"Payment:  {dto.payment_method}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*56}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<24} {item.quantity:>5} {item.price_display:>12} {item.total_display:>12}"
        )
    click.echo(f"  {'-'*56}")
    click.echo(f"  {'Subtotal':<30} {dto.subtotal_display:>25}")
    click.echo(f"  {'Delivery':<30} {dto.delivery_fee_display:>25}")
    click.echo(f"  {'Order Total':<30} {dto.total_display:>25}")


@click.command("create")
@click.option("--first-name", required=True)
@click.option("--last-name", required=True)
@click.option("--email", required=True)
@click.option("--phone", required=True)
@click.option("--street", required=True)
@click.option("--city", required=True)
@click.option("--province", required=True)
@click.option("--postal-code", required=True)
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option(
    "--payment-method",
    required=True,
    type=click.Choice(PAYMENT_METHODS),
)
@click.option("--notes", default="", help="Delivery instructions.")
@click.pass_obj
def order_create(
    app,
    first_name: str,
    last_name: str,
    email: str,
    phone: str,
    street: str,
    city: str,
    province: str,
    postal_code: str,
    items: str,
    payment_method: str,
    notes: str,
) -> None:
    """Place a new order (prices come from the catalog)."""
    request = CreateOrderRequest(
        customer_details=CustomerDetails(first_name, last_name, email, phone),
        delivery_address=DeliveryAddress(street, city, province, postal_code),
        items=_parse_items(items),
        payment_method=payment_method,
        notes=notes,
    )

    handler = CreateOrderHandler(
        order_repo=order_repository(app.conn),
        product_repo=product_repository(app.conn),
    )

    try:
        order = handler.handle(request)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order.reference_number} created.")
    _display_order(OrderDTO.from_order(order))


@click.command("show")
@click.option("--id", "order_id", default=None, help="Order ID to display.")
@click.option("--reference", default=None, help="Reference number, e.g. LEBO-...")
@click.pass_obj
def order_show(app, order_id: str | None, reference: str | None) -> None:
    """Show details of an existing order."""
    if bool(order_id) == bool(reference):
        raise click.UsageError("Pass exactly one of --id or --reference.")

    handler = ShowOrderHandler(order_repo=order_repository(app.conn))

    try:
        if order_id:
            order = handler.handle(order_id)
        else:
            order = handler.handle_by_reference(reference)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if order is None:
        raise click.ClickException(f"Order {order_id or reference} not found")

    _display_order(OrderDTO.from_order(order))


@click.command("list")
@click.option("--status", type=click.Choice(ORDER_STATUSES), default=None)
@click.option("--payment-status", type=click.Choice(PAYMENT_STATUSES), default=None)
@click.option("--limit", type=int, default=None)
@click.pass_obj
def order_list(app, status: str | None, payment_status: str | None, limit: int | None) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(order_repo=order_repository(app.conn))

    try:
        orders = handler.handle(status=status, payment_status=payment_status, limit=limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Reference':<24} {'Status':<12} {'Payment':<10} {'Total':>12}")
    click.echo("-" * 61)
    for o in orders:
        dto = OrderDTO.from_order(o)
        click.echo(
            f"{dto.reference_number:<24} {dto.status:<12} {dto.payment_status:<10} {dto.total_display:>12}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--to", "new_status", required=True, type=click.Choice(ORDER_STATUSES))
@click.pass_obj
def order_status(app, order_id: str, new_status: str) -> None:
    """Move an order to a new status."""
    handler = UpdateOrderStatusHandler(order_repo=order_repository(app.conn))

    try:
        order = handler.handle(order_id, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order.reference_number} is now {order.status.value}.")


@click.command("payment")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--to", "new_status", required=True, type=click.Choice(PAYMENT_STATUSES))
@click.pass_obj
def order_payment(app, order_id: str, new_status: str) -> None:
    """Record a payment status change (paying a pending order confirms it)."""
    handler = UpdatePaymentStatusHandler(order_repo=order_repository(app.conn))

    try:
        order = handler.handle(order_id, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Order {order.reference_number}: payment {order.payment_status.value}, "
        f"status {order.status.value}."
    )
