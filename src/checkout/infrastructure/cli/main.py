import click

from checkout.infrastructure.cli.cart_commands import cart_summary
from checkout.infrastructure.cli.order_commands import order_place, order_show
from checkout.infrastructure.cli.rate_commands import rate_show
from checkout.infrastructure.config import get_settings
from checkout.infrastructure.logging_setup import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Override CHECKOUT_LOG_LEVEL.")
def cli(log_level: str | None) -> None:
    """Checkout: turn a cart into a paid, persisted order"""
    configure_logging(log_level or get_settings().log_level)


@cli.group()
def order() -> None:
    """Place and inspect orders."""


@cli.group()
def cart() -> None:
    """Inspect the cart."""


@cli.group()
def rate() -> None:
    """Currency rates."""


# Register subcommands
order.add_command(order_place)
order.add_command(order_show)
cart.add_command(cart_summary)
rate.add_command(rate_show)
