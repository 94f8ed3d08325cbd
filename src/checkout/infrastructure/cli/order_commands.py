"""CLI commands for placing and showing orders."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from checkout.application.dto import CheckoutRequest, CheckoutResult, OrderDTO
from checkout.domain.exceptions import DomainException, PaymentCancelledError
from checkout.domain.model.payment import PaymentIntent, PaymentMethod
from checkout.infrastructure.bootstrap import cart_repository, services
from checkout.infrastructure.config import get_settings


async def _approve_in_browser(intent: PaymentIntent) -> None:
    """Let the payer approve the intent in PayPal's UI before capture."""
    click.echo(f"Approve the payment of {intent.amount} at:")
    click.echo(f"  {intent.approve_url}")
    if not click.confirm("Payment approved?", default=False):
        raise PaymentCancelledError(f"Payer closed the payment window for {intent.intent_id}")


async def _place(cart_path: Path, method: PaymentMethod) -> CheckoutResult:
    settings = get_settings()
    repo = cart_repository(cart_path, settings)
    cart = repo.load()

    async with services(settings, approval=_approve_in_browser) as svc:
        shipping = await svc.delivery.current_quote()
        result = await svc.orchestrator.checkout(
            CheckoutRequest(
                cart_id=cart.cart_id,
                lines=cart.lines,
                shipping_address=cart.shipping_address,
                payment_method=method,
                shipping=shipping,
                customer_name=cart.customer_name,
            )
        )

    if result.clear_cart:
        repo.clear()
    return result


@click.command("place")
@click.option(
    "--cart",
    "cart_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Cart JSON file.",
)
@click.option(
    "--method",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.CASH.value,
    show_default=True,
    help="Payment method.",
)
def order_place(cart_path: Path, method: str) -> None:
    """Check out the cart in CART_PATH."""
    try:
        result = asyncio.run(_place(cart_path, PaymentMethod(method)))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.succeeded:
        raise click.ClickException(result.message)

    click.echo(result.message)
    click.echo(f"Order {result.order_id}  total {result.total}  paid={result.is_paid}")


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  ({dto.payment_method}, paid={dto.is_paid})")
    click.echo(f"Created:  {dto.created_at}")
    if dto.transaction_id:
        click.echo(f"Transaction: {dto.transaction_id}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Variant':<12} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*69}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<24} {item.variant or '':<12} {item.quantity:>5} "
            f"{item.unit_price:>12} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*69}")
    click.echo(f"  {'Subtotal':<43} {dto.items_price:>25}")
    click.echo(f"  {'Shipping':<43} {dto.shipping_price:>25}")
    click.echo(f"  {'Total':<43} {dto.total_price:>25}")


async def _show(order_id: str) -> OrderDTO:
    async with services(get_settings()) as svc:
        return await svc.show_order.handle(order_id)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order id to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    try:
        dto = asyncio.run(_show(order_id))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)
