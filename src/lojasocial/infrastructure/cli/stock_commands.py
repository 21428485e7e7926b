"""CLI commands for stock intake and expiry monitoring."""

from __future__ import annotations

from datetime import datetime

import click

from lojasocial.application.check_expiring_items import (
    CheckExpiringItemsHandler,
    ShowExpiringItemsHandler,
)
from lojasocial.application.receive_stock import ReceiveStockHandler
from lojasocial.application.show_stock import ProductStockDTO, ShowStockHandler
from lojasocial.domain.exceptions import DomainException
from lojasocial.infrastructure.bootstrap import notifier, unit_of_work
from lojasocial.infrastructure.cli.options import DATE_FORMATS, fmt_date, utc_datetime
from lojasocial.infrastructure.config import get_settings


@click.command("receive")
@click.option("--barcode", required=True, help="Barcode printed on the batch.")
@click.option("--quantity", required=True, type=int, help="Units received.")
@click.option("--product", "product_id", default=None, help="Product ID (defaults to the barcode's product).")
@click.option(
    "--expires",
    type=click.DateTime(DATE_FORMATS),
    default=None,
    callback=utc_datetime,
    help="Expiration date (YYYY-MM-DD).",
)
@click.option("--campaign", "campaign_id", default=None, help="Donation campaign ID.")
def stock_receive(
    barcode: str,
    quantity: int,
    product_id: str | None,
    expires: datetime | None,
    campaign_id: str | None,
) -> None:
    """Record a received batch of donated stock."""
    handler = ReceiveStockHandler(unit_of_work())

    try:
        item = handler.handle(
            barcode=barcode,
            quantity=quantity,
            product_id=product_id,
            expiration_date=expires,
            campaign_id=campaign_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Batch {item.id} received: {item.quantity} x '{item.product_id}' "
        f"(expires {fmt_date(item.expiration_date)})"
    )


def _display_stock(summary: ProductStockDTO, with_batches: bool) -> None:
    p = summary.product
    click.echo(
        f"{p.id:<16} {p.name:<24} {summary.total:>8} {summary.reserved:>10} {summary.available:>10}"
    )
    if not with_batches:
        return
    for b in summary.batches:
        click.echo(
            f"    batch {b.id[:8]}  expires {fmt_date(b.expiration_date):<16} "
            f"qty={b.quantity} reserved={b.reserved_quantity}"
        )


@click.command("show")
@click.option("--product", "product_id", default=None, help="Only this product, with its batches.")
def stock_show(product_id: str | None) -> None:
    """Show stock levels per product."""
    handler = ShowStockHandler(unit_of_work())

    try:
        summaries = [handler.handle(product_id)] if product_id else handler.handle_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not summaries:
        click.echo("No products found.")
        return

    click.echo(f"{'Product':<16} {'Name':<24} {'Total':>8} {'Reserved':>10} {'Available':>10}")
    click.echo("-" * 72)
    for summary in summaries:
        _display_stock(summary, with_batches=product_id is not None)


@click.command("expiring")
@click.option("--days", type=click.IntRange(min=0), default=None, help="Look-ahead window in days.")
def stock_expiring(days: int | None) -> None:
    """List batches with available units that expire soon."""
    handler = ShowExpiringItemsHandler(
        unit_of_work(), default_days=get_settings().expiring_days_threshold
    )

    try:
        entries = handler.handle(days)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not entries:
        click.echo("No batches expiring soon.")
        return

    click.echo(f"{'Days':>4}  {'Product':<24} {'Expires':<16} {'Available':>10}")
    click.echo("-" * 58)
    for e in entries:
        name = e.product.name if e.product is not None else e.stock_item.product_id
        click.echo(
            f"{e.days_until_expiration:>4}  {name:<24} "
            f"{fmt_date(e.stock_item.expiration_date):<16} {e.stock_item.available_quantity:>10}"
        )


@click.command("check")
@click.option("--days", type=click.IntRange(min=0), default=None, help="Look-ahead window in days.")
def stock_check(days: int | None) -> None:
    """Run the expiry check and notify staff when batches need attention."""
    handler = CheckExpiringItemsHandler(
        unit_of_work(), notifier(), default_days=get_settings().expiring_days_threshold
    )

    try:
        result = handler.handle(days)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    suffix = " (staff notified)" if result.notified else ""
    click.echo(
        f"{result.item_count} batch(es) expiring within {result.days_threshold} days{suffix}"
    )
