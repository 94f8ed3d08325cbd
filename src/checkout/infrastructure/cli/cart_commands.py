"""CLI commands for the cart."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from checkout.application.dto import PriceSummaryDTO
from checkout.domain.exceptions import DomainException
from checkout.infrastructure.bootstrap import cart_repository, services
from checkout.infrastructure.config import get_settings


async def _summary(cart_path: Path) -> PriceSummaryDTO:
    settings = get_settings()
    cart = cart_repository(cart_path, settings).load()
    async with services(settings) as svc:
        shipping = await svc.delivery.current_quote()
        return await svc.price_summary.handle(cart.lines, shipping)


@click.command("summary")
@click.option(
    "--cart",
    "cart_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Cart JSON file.",
)
def cart_summary(cart_path: Path) -> None:
    """Show cart totals, including the secondary-currency amount."""
    try:
        dto = asyncio.run(_summary(cart_path))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{'Subtotal:':<12} {str(dto.items_price):>14}")
    click.echo(f"{'Shipping:':<12} {str(dto.shipping_price):>14}")
    click.echo(f"{'Total:':<12} {str(dto.total_price):>14}")
    click.echo(f"{'':<12} {str(dto.display_total):>14}  ({dto.rate_source} rate)")
