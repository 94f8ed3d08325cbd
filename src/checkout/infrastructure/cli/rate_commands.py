"""CLI commands for currency rates."""

from __future__ import annotations

import asyncio

import click

from checkout.domain.service.rate_cache import RateLookup
from checkout.infrastructure.bootstrap import services
from checkout.infrastructure.config import get_settings


async def _lookup(base: str, quote: str) -> RateLookup:
    async with services(get_settings()) as svc:
        return await svc.rate_cache.lookup(base, quote)


@click.command("show")
@click.option("--base", default=None, help="Base currency (defaults to the primary currency).")
@click.option("--quote", default=None, help="Quote currency (defaults to the display currency).")
def rate_show(base: str | None, quote: str | None) -> None:
    """Show the conversion rate the checkout would use right now."""
    settings = get_settings()
    base = (base or settings.primary_currency).upper()
    quote = (quote or settings.display_currency).upper()

    lookup = asyncio.run(_lookup(base, quote))

    when = lookup.fetched_at.strftime("%Y-%m-%d %H:%M UTC") if lookup.fetched_at else "-"
    click.echo(f"1 {base} = {lookup.rate} {quote}  (source={lookup.source}, fetched={when})")
