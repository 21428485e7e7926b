"""Shared plumbing for the request status transition use cases.

A transition is a read-then-compare-and-swap:
  1. read the request in its own short transaction,
  2. let the aggregate validate and apply the change in memory,
  3. in one transaction, save it only if the stored status still equals
     the status read in step 1, and run the stock side effect.

A concurrent transition that won the race makes step 3 fail with
InvalidTransitionError; nothing from the losing call is applied.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from lojasocial.domain.exceptions import EntityNotFoundError
from lojasocial.domain.model.request import Request, RequestStatus
from lojasocial.domain.repository.unit_of_work import UnitOfWork
from lojasocial.domain.service.notifier import EventType, Notifier, publish
from lojasocial.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class RequestTransitionHandler:

    def __init__(self, uow: UnitOfWork, notifier: Notifier) -> None:
        self._uow = uow
        self._notifier = notifier
        self._ledger = StockLedger(uow)

    def _load(self, request_id: str) -> Request:
        with self._uow:
            request = self._uow.requests.get_by_id(request_id)
        if request is None:
            raise EntityNotFoundError(f"Request #{request_id} not found")
        return request

    def _store(
        self,
        request: Request,
        expected_status: RequestStatus,
        settle: Callable[[str], Any] | None = None,
    ) -> None:
        """Compare-and-swap the request and settle its reservations atomically."""
        with self._uow:
            self._uow.requests.save(request, expected_status=expected_status)
            if settle is not None:
                for reservation_id in request.reservation_ids:
                    settle(reservation_id)
        logger.info(
            "Request %s: %s -> %s", request.id, expected_status.value, request.status.value
        )

    def _publish(self, event_type: EventType, request: Request, **extra: Any) -> None:
        payload = {
            "requestId": request.id,
            "userId": request.user_id,
            "status": request.status.value,
        }
        payload.update(extra)
        publish(self._notifier, event_type, payload)
