"""Application service: expiring stock queries.

``ShowExpiringItemsHandler`` is the on-demand listing. The
``CheckExpiringItemsHandler`` is what the daily scheduler runs: it scans
and tells the notifier how many batches need attention.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from lojasocial.application.dto import ExpiringItemDTO, expiring_item_to_dto
from lojasocial.domain.repository.unit_of_work import UnitOfWork
from lojasocial.domain.service.catalog import Catalog
from lojasocial.domain.service.expiration_scanner import (
    DEFAULT_DAYS_THRESHOLD,
    ExpirationScanner,
)
from lojasocial.domain.service.notifier import EventType, Notifier, publish
from lojasocial.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpirationCheckDTO:
    days_threshold: int
    item_count: int
    notified: bool


def _scanner(uow: UnitOfWork, default_days: int) -> ExpirationScanner:
    return ExpirationScanner(StockLedger(uow), Catalog(uow), default_days=default_days)


class ShowExpiringItemsHandler:

    def __init__(self, uow: UnitOfWork, default_days: int = DEFAULT_DAYS_THRESHOLD) -> None:
        self._scanner = _scanner(uow, default_days)

    def handle(
        self,
        days: int | None = None,
        now: datetime | None = None,
    ) -> list[ExpiringItemDTO]:
        return [expiring_item_to_dto(e) for e in self._scanner.scan(days, now=now)]


class CheckExpiringItemsHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: Notifier,
        default_days: int = DEFAULT_DAYS_THRESHOLD,
    ) -> None:
        self._scanner = _scanner(uow, default_days)
        self._notifier = notifier
        self._default_days = default_days

    def handle(self, days: int | None = None, now: datetime | None = None) -> ExpirationCheckDTO:
        threshold = self._default_days if days is None else days
        items = self._scanner.scan(threshold, now=now)
        logger.info("Found %d batch(es) expiring within %d days", len(items), threshold)

        if not items:
            return ExpirationCheckDTO(days_threshold=threshold, item_count=0, notified=False)

        notified = publish(
            self._notifier,
            EventType.EXPIRING_ITEMS,
            {
                "itemCount": len(items),
                "daysThreshold": threshold,
                "stockItemIds": [e.stock_item.id for e in items],
            },
        )
        return ExpirationCheckDTO(
            days_threshold=threshold, item_count=len(items), notified=notified
        )
