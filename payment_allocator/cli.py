"""
cli.py — Command-Line Entry Point

Usage:
    payment-allocator ORDERS_PATH METHODS_PATH [--details] [--log-level LEVEL]

Loads both JSON sources, runs the allocation, and prints one
`<methodId> paid=<amount>` line per payment method.
"""

import sys

import click

from .engine import allocate
from .errors import PaymentAllocatorError
from .loader import load_orders, load_payment_methods
from .logging_config import get_logger, setup_logging
from .reporter import card_total_line, order_breakdown_lines, summary_lines, unsettled_lines

log = get_logger(__name__)


@click.command()
@click.argument("orders_path", type=click.Path(dir_okay=False))
@click.argument("methods_path", type=click.Path(dir_okay=False))
@click.option("--details", is_flag=True, default=False, help="Also print per-order payments, the card total and unsettled orders.")
@click.option("--log-level", default=None, help="Override PAYMENT_ALLOCATOR_LOG_LEVEL.")
def main(orders_path: str, methods_path: str, details: bool, log_level) -> None:
    """Allocate the orders in ORDERS_PATH to the payment methods in METHODS_PATH."""
    setup_logging(level=log_level)

    try:
        orders = load_orders(orders_path)
        methods = load_payment_methods(methods_path)
        ledger = allocate(orders, methods)
    except PaymentAllocatorError as e:
        log.critical(f"Zuteilung abgebrochen: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for line in summary_lines(ledger):
        click.echo(line)

    if details:
        click.echo()
        for line in order_breakdown_lines(ledger):
            click.echo(line)
        click.echo(card_total_line(ledger))
        for line in unsettled_lines(ledger, orders):
            click.echo(line)


if __name__ == "__main__":
    main()
