"""CLI commands for the Request aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from lojasocial.application.accept_request import AcceptRequestHandler
from lojasocial.application.cancel_request import CancelRequestHandler
from lojasocial.application.complete_request import CompleteRequestHandler
from lojasocial.application.dto import RequestDTO, RequestItemSpec
from lojasocial.application.list_requests import ListRequestsHandler
from lojasocial.application.propose_pickup_date import ProposePickupDateHandler
from lojasocial.application.reject_request import RejectRequestHandler
from lojasocial.application.show_request import ShowRequestHandler
from lojasocial.application.submit_request import SubmitRequestHandler
from lojasocial.domain.exceptions import DomainException
from lojasocial.domain.model.request import RequestStatus
from lojasocial.infrastructure.bootstrap import notifier, unit_of_work
from lojasocial.infrastructure.cli.options import DATE_FORMATS, fmt_date, utc_datetime
from lojasocial.infrastructure.config import get_settings


def _parse_items(raw: str) -> list[RequestItemSpec]:
    """Parse 'arroz-1kg:2,5601234567890:1' into RequestItemSpec list."""
    specs: list[RequestItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'Product:Quantity'."
            )
        key, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{key}'."
            )
        specs.append(RequestItemSpec(product_key=key.strip(), quantity=qty))
    return specs


def _display_request(dto: RequestDTO) -> None:
    click.echo(f"Request #{dto.id}  (status={dto.status})")
    click.echo(f"Beneficiary: {dto.user_id}")
    click.echo(f"Submitted:   {fmt_date(dto.submission_date)}")
    click.echo(f"Pickup:      {fmt_date(dto.scheduled_pickup_date)}")
    if dto.proposed_delivery_date is not None:
        click.echo(f"Proposed:    {fmt_date(dto.proposed_delivery_date)}")
    if dto.rejection_reason:
        click.echo(f"Reason:      {dto.rejection_reason}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Category':<16}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(f"  {item.product_id:<24} {item.quantity:>5} {item.category:<16}")
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Total items':<24} {dto.total_items:>5}")


@click.command("submit")
@click.option("--user", "user_id", required=True, help="Beneficiary ID.")
@click.option("--items", required=True, help="Items as 'Product:Qty,Product:Qty' (ID or barcode).")
@click.option(
    "--date",
    "proposed_date",
    type=click.DateTime(DATE_FORMATS),
    default=None,
    callback=utc_datetime,
    help="Preferred pickup date.",
)
def request_submit(user_id: str, items: str, proposed_date: datetime | None) -> None:
    """Submit a cart as a new pickup request (reserves stock)."""
    specs = _parse_items(items)

    handler = SubmitRequestHandler(
        unit_of_work(), notifier(), max_items=get_settings().max_items_per_request
    )

    try:
        dto = handler.handle(
            user_id=user_id, item_specs=specs, proposed_delivery_date=proposed_date
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_request(dto)


@click.command("show")
@click.option("--id", "request_id", required=True, help="Request ID to display.")
def request_show(request_id: str) -> None:
    """Show details of a request."""
    try:
        dto = ShowRequestHandler(unit_of_work()).handle(request_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_request(dto)


@click.command("list")
@click.option("--user", "user_id", default=None, help="Only this beneficiary's requests.")
@click.option(
    "--status",
    type=click.Choice([s.value for s in RequestStatus], case_sensitive=False),
    default=None,
    help="Only requests in this status.",
)
def request_list(user_id: str | None, status: str | None) -> None:
    """List requests, newest first."""
    handler = ListRequestsHandler(unit_of_work())
    dtos = handler.handle(
        user_id=user_id, status=RequestStatus(status.upper()) if status else None
    )

    if not dtos:
        click.echo("No requests found.")
        return

    click.echo(f"{'ID':<34} {'User':<16} {'Status':<16} {'Items':>5} {'Pickup':<16}")
    click.echo("-" * 91)
    for r in dtos:
        click.echo(
            f"{r.id:<34} {r.user_id:<16} {r.status:<16} {r.total_items:>5} "
            f"{fmt_date(r.scheduled_pickup_date):<16}"
        )
    click.echo()
    click.echo(f"{handler.pending_count()} request(s) awaiting a decision.")


@click.command("accept")
@click.option("--id", "request_id", required=True, help="Request ID to accept.")
@click.option(
    "--date",
    "scheduled_date",
    type=click.DateTime(DATE_FORMATS),
    default=None,
    callback=utc_datetime,
    help="Pickup date (defaults to the beneficiary's proposal).",
)
def request_accept(request_id: str, scheduled_date: datetime | None) -> None:
    """Accept a submitted request and schedule the pickup."""
    handler = AcceptRequestHandler(unit_of_work(), notifier())

    try:
        dto = handler.handle(request_id, scheduled_date)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Request #{request_id} accepted, pickup on {fmt_date(dto.scheduled_pickup_date)}.")


@click.command("reject")
@click.option("--id", "request_id", required=True, help="Request ID to reject.")
@click.option("--reason", default=None, help="Reason shown to the beneficiary.")
def request_reject(request_id: str, reason: str | None) -> None:
    """Reject a request (releases reserved stock)."""
    handler = RejectRequestHandler(unit_of_work(), notifier())

    try:
        handler.handle(request_id, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Request #{request_id} rejected.")


@click.command("complete")
@click.option("--id", "request_id", required=True, help="Request ID to complete.")
def request_complete(request_id: str) -> None:
    """Mark a request as picked up (consumes reserved stock)."""
    handler = CompleteRequestHandler(unit_of_work(), notifier())

    try:
        handler.handle(request_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Request #{request_id} completed.")


@click.command("cancel")
@click.option("--id", "request_id", required=True, help="Request ID to cancel.")
@click.option("--user", "user_id", required=True, help="Beneficiary cancelling the request.")
def request_cancel(request_id: str, user_id: str) -> None:
    """Cancel an open request (releases reserved stock)."""
    handler = CancelRequestHandler(unit_of_work(), notifier())

    try:
        handler.handle(request_id, requested_by=user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Request #{request_id} cancelled.")


@click.command("propose-date")
@click.option("--id", "request_id", required=True, help="Request ID.")
@click.option(
    "--date",
    "proposed_date",
    required=True,
    type=click.DateTime(DATE_FORMATS),
    callback=utc_datetime,
    help="Proposed pickup date.",
)
@click.option("--user", "user_id", default=None, help="Beneficiary making the proposal.")
@click.option("--employee", is_flag=True, default=False, help="Proposal made by staff.")
def request_propose_date(
    request_id: str, proposed_date: datetime, user_id: str | None, employee: bool
) -> None:
    """Propose a new pickup date for an open request."""
    if not employee and not user_id:
        raise click.ClickException("--user is required unless --employee is given")

    handler = ProposePickupDateHandler(unit_of_work(), notifier())

    try:
        handler.handle(
            request_id,
            proposed_date=proposed_date,
            by_employee=employee,
            requested_by=user_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Pickup date {fmt_date(proposed_date)} proposed for request #{request_id}.")
