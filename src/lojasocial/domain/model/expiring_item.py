"""Read model combining an expiring batch with its catalog entry."""

from __future__ import annotations

from dataclasses import dataclass

from lojasocial.domain.model.product import Product
from lojasocial.domain.model.stock_item import StockItem


@dataclass(frozen=True)
class ExpiringItemWithProduct:
    """Computed at read time, never persisted.

    ``product`` is None when the catalog has no entry for the batch.
    """

    stock_item: StockItem
    product: Product | None
    days_until_expiration: int
