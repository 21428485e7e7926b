"""Domain service: Stock Ledger.

The ledger is the only writer of ``StockItem.quantity`` and
``StockItem.reserved_quantity``. Each public operation runs as one
transaction on the unit of work, so either every batch it touches is
updated or none is.

Batches are picked First-Expire-First-Out: the batch closest to expiry
is consumed first, batches without an expiry date last.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from lojasocial.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    InvariantViolationError,
    ValidationError,
)
from lojasocial.domain.model.reservation import (
    ReservationLine,
    ReservationPlan,
    ReservationStatus,
)
from lojasocial.domain.model.stock_item import StockItem
from lojasocial.domain.model.value_objects import Quantity
from lojasocial.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

_FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)


def fefo_key(item: StockItem) -> tuple:
    """Sort key: earliest expiry first, undated batches last, then oldest."""
    return (
        item.expiration_date is None,
        item.expiration_date or _FAR_FUTURE,
        item.created_at,
        item.id,
    )


class StockLedger:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    # --- Intake ---------------------------------------------------------------

    def receive(
        self,
        barcode: str,
        product_id: str,
        quantity: int,
        expiration_date: datetime | None = None,
        campaign_id: str | None = None,
    ) -> StockItem:
        """Register a newly received batch of a catalog product."""
        qty = Quantity(quantity)
        if not barcode or not barcode.strip():
            raise ValidationError("Barcode is required")
        with self._uow:
            if self._uow.products.get_by_id(product_id) is None:
                raise EntityNotFoundError(f"Product not found: '{product_id}'")
            item = StockItem(
                id=self._uow.stock_items.next_id(),
                barcode=barcode.strip(),
                product_id=product_id,
                quantity=qty.value,
                campaign_id=campaign_id,
                expiration_date=expiration_date,
            )
            self._uow.stock_items.save(item)
        logger.info(
            "Received batch %s: %d x product %s (expires %s)",
            item.id, item.quantity, product_id, expiration_date,
        )
        return item

    # --- Reservation lifecycle ------------------------------------------------

    def reserve(self, product_id: str, quantity: int) -> ReservationPlan:
        """Hold ``quantity`` units of a product across its batches.

        Uses a two-phase approach inside the transaction:
          Phase 1 - load and validate: sum what is available over every
                    batch. Fails before any mutation if it is not enough.
          Phase 2 - mutate and persist: reserve batch by batch in FEFO
                    order until the requested quantity is covered.
        """
        qty = Quantity(quantity).value
        with self._uow:
            # Phase 1: load and validate
            batches = sorted(
                (
                    item
                    for item in self._uow.stock_items.list_by_product_id(product_id)
                    if item.available_quantity > 0
                ),
                key=fefo_key,
            )
            available = sum(item.available_quantity for item in batches)
            if available < qty:
                raise InsufficientStockError(
                    f"Insufficient stock for product '{product_id}' "
                    f"(need {qty}, have {available} available)"
                )

            # Phase 2: mutate and persist
            lines: list[ReservationLine] = []
            remaining = qty
            for item in batches:
                take = min(remaining, item.available_quantity)
                item.reserve(take)
                self._uow.stock_items.save(item)
                lines.append(ReservationLine(stock_item_id=item.id, quantity=take))
                remaining -= take
                if remaining == 0:
                    break

            plan = ReservationPlan(
                id=self._uow.reservations.next_id(),
                product_id=product_id,
                lines=lines,
            )
            self._uow.reservations.save(plan)

        logger.info(
            "Reserved %d x product %s as %s over %d batch(es)",
            qty, product_id, plan.id, len(lines),
        )
        return plan

    def release(self, reservation_id: str) -> ReservationPlan:
        """Give the held units back to available stock.

        Idempotent: releasing an already released plan changes nothing.
        """
        with self._uow:
            plan = self._get_plan(reservation_id)
            if plan.status == ReservationStatus.RELEASED:
                logger.debug("Reservation %s already released", reservation_id)
                return plan
            plan.mark_released()
            for line in plan.lines:
                item = self._get_batch(line.stock_item_id, plan)
                try:
                    item.release(line.quantity)
                except InvariantViolationError:
                    logger.error("Release of %s failed on batch %s", plan.id, item.id)
                    raise
                self._uow.stock_items.save(item)
            self._uow.reservations.save(plan)
        logger.info("Released reservation %s (%d units)", plan.id, plan.total_quantity)
        return plan

    def commit(self, reservation_id: str) -> ReservationPlan:
        """Turn the held units into a permanent stock deduction.

        Raises InvariantViolationError if a batch holds fewer reserved
        units than the plan says, which can only happen through a bug.
        """
        with self._uow:
            plan = self._get_plan(reservation_id)
            if plan.status == ReservationStatus.COMMITTED:
                logger.debug("Reservation %s already committed", reservation_id)
                return plan
            plan.mark_committed()
            for line in plan.lines:
                item = self._get_batch(line.stock_item_id, plan)
                try:
                    item.commit(line.quantity)
                except InvariantViolationError:
                    logger.error("Commit of %s failed on batch %s", plan.id, item.id)
                    raise
                self._uow.stock_items.save(item)
            self._uow.reservations.save(plan)
        logger.info("Committed reservation %s (%d units)", plan.id, plan.total_quantity)
        return plan

    # --- Queries --------------------------------------------------------------

    def expiring_within(self, days: int, now: datetime | None = None) -> list[StockItem]:
        """Batches with stock left that expire between now and now + days.

        Re-queried on every call.
        """
        if days < 0:
            raise ValidationError("Days must be zero or positive")
        start = now or datetime.now(timezone.utc)
        try:
            end = start + timedelta(days=days)
        except OverflowError:
            # Window reaches past the last representable date
            end = _FAR_FUTURE
        with self._uow:
            items = self._uow.stock_items.list_all()
        return [
            item
            for item in items
            if item.available_quantity > 0 and item.expires_between(start, end)
        ]

    def available_for(self, product_id: str) -> int:
        with self._uow:
            items = self._uow.stock_items.list_by_product_id(product_id)
        return sum(item.available_quantity for item in items)

    def list_batches(self, product_id: str | None = None) -> list[StockItem]:
        with self._uow:
            if product_id is None:
                items = self._uow.stock_items.list_all()
            else:
                items = self._uow.stock_items.list_by_product_id(product_id)
        return sorted(items, key=fefo_key)

    def get_reservation(self, reservation_id: str) -> ReservationPlan:
        with self._uow:
            return self._get_plan(reservation_id)

    # --- Internal helpers -----------------------------------------------------

    def _get_plan(self, reservation_id: str) -> ReservationPlan:
        plan = self._uow.reservations.get_by_id(reservation_id)
        if plan is None:
            raise EntityNotFoundError(f"Reservation '{reservation_id}' not found")
        return plan

    def _get_batch(self, stock_item_id: str, plan: ReservationPlan) -> StockItem:
        item = self._uow.stock_items.get_by_id(stock_item_id)
        if item is None:
            logger.error("Batch %s of reservation %s is missing", stock_item_id, plan.id)
            raise InvariantViolationError(
                f"Batch '{stock_item_id}' of reservation {plan.id} no longer exists"
            )
        return item
