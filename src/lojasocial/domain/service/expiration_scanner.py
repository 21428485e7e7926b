"""Domain service: Expiration Scanner.

A read-only sweep over the stock ledger that reports batches close to
their expiry date together with their catalog entry. It never mutates
stock or requests.
"""

from __future__ import annotations

from datetime import datetime, timezone

from lojasocial.domain.model.expiring_item import ExpiringItemWithProduct
from lojasocial.domain.service.catalog import Catalog
from lojasocial.domain.service.stock_ledger import StockLedger

DEFAULT_DAYS_THRESHOLD = 3


class ExpirationScanner:

    def __init__(
        self,
        ledger: StockLedger,
        catalog: Catalog,
        default_days: int = DEFAULT_DAYS_THRESHOLD,
    ) -> None:
        self._ledger = ledger
        self._catalog = catalog
        self._default_days = default_days

    def scan(
        self,
        days: int | None = None,
        now: datetime | None = None,
    ) -> list[ExpiringItemWithProduct]:
        """Expiring batches, most urgent first.

        Ties on days left are broken by product ID, then batch ID.
        """
        now = now or datetime.now(timezone.utc)
        threshold = self._default_days if days is None else days

        result = [
            ExpiringItemWithProduct(
                stock_item=item,
                product=self._catalog.get_product(item.product_id),
                days_until_expiration=item.days_until_expiration(now),
            )
            for item in self._ledger.expiring_within(threshold, now=now)
        ]
        result.sort(
            key=lambda e: (e.days_until_expiration, e.stock_item.product_id, e.stock_item.id)
        )
        return result
