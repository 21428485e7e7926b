"""Application service: Submit Request use case.

Turns a beneficiary's cart into a SUBMITTED request holding stock.

Each distinct product is reserved in its own ledger transaction, so the
submission as a whole is not one transaction. If any product cannot be
reserved, every reservation already made for this cart is released
before the error reaches the caller.
"""

from __future__ import annotations

import logging
from datetime import datetime

from lojasocial.application.dto import RequestDTO, RequestItemSpec, request_to_dto
from lojasocial.domain.exceptions import DomainException, EntityNotFoundError
from lojasocial.domain.model.request import (
    DEFAULT_MAX_ITEMS,
    Request,
    RequestItemDetail,
    check_cart_size,
)
from lojasocial.domain.model.value_objects import Quantity
from lojasocial.domain.repository.unit_of_work import UnitOfWork
from lojasocial.domain.service.catalog import Catalog
from lojasocial.domain.service.notifier import EventType, Notifier, publish
from lojasocial.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class SubmitRequestHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: Notifier,
        max_items: int = DEFAULT_MAX_ITEMS,
    ) -> None:
        self._uow = uow
        self._notifier = notifier
        self._max_items = max_items
        self._catalog = Catalog(uow)
        self._ledger = StockLedger(uow)

    def handle(
        self,
        user_id: str,
        item_specs: list[RequestItemSpec],
        proposed_delivery_date: datetime | None = None,
    ) -> RequestDTO:
        """Submit a new pickup request.

        Steps:
        1. Check cart size (empty, cap) on the raw lines, before any
           catalog lookup.
        2. Resolve every cart line to a catalog product and merge lines
           of the same product (first-seen order).
        3. Build the Request aggregate.
        4. Reserve stock once per product, compensating on failure.
        5. Persist the request with its reservation references.
        """
        check_cart_size([Quantity(spec.quantity) for spec in item_specs], self._max_items)

        request = Request.create(
            user_id=user_id,
            items=self._build_items(item_specs),
            max_items=self._max_items,
            proposed_delivery_date=proposed_delivery_date,
        )

        reservation_ids: list[str] = []
        try:
            for item in request.items:
                plan = self._ledger.reserve(item.product_id, item.quantity.value)
                reservation_ids.append(plan.id)

            request.reservation_ids = reservation_ids
            with self._uow:
                request.id = self._uow.requests.next_id()
                self._uow.requests.save(request)
        except Exception:
            request.id = None
            self._compensate(reservation_ids)
            raise

        logger.info(
            "Request %s submitted by %s (%d items)",
            request.id, request.user_id, request.total_items,
        )
        publish(
            self._notifier,
            EventType.REQUEST_SUBMITTED,
            {
                "requestId": request.id,
                "userId": request.user_id,
                "totalItems": request.total_items,
            },
        )
        return request_to_dto(request)

    # --- Internal helpers -----------------------------------------------------

    def _build_items(self, item_specs: list[RequestItemSpec]) -> list[RequestItemDetail]:
        merged: dict[str, Quantity] = {}
        for spec in item_specs:
            quantity = Quantity(spec.quantity)
            product_id = self._catalog.resolve_product_id(spec.product_key)
            merged[product_id] = merged[product_id] + quantity if product_id in merged else quantity

        items: list[RequestItemDetail] = []
        for product_id, quantity in merged.items():
            product = self._catalog.get_product(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{product_id}'")
            items.append(
                RequestItemDetail(
                    product_id=product_id,
                    quantity=quantity,
                    category_snapshot=product.category,
                )
            )
        return items

    def _compensate(self, reservation_ids: list[str]) -> None:
        for reservation_id in reservation_ids:
            try:
                self._ledger.release(reservation_id)
            except DomainException:
                logger.exception(
                    "Could not release reservation %s while undoing a failed submission",
                    reservation_id,
                )
        if reservation_ids:
            logger.warning(
                "Submission failed; released %d reservation(s)", len(reservation_ids)
            )
