"""Application service: Receive Stock use case (stock intake)."""

from __future__ import annotations

from datetime import datetime

from lojasocial.application.dto import StockItemDTO, stock_item_to_dto
from lojasocial.domain.repository.unit_of_work import UnitOfWork
from lojasocial.domain.service.catalog import Catalog
from lojasocial.domain.service.stock_ledger import StockLedger


class ReceiveStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._catalog = Catalog(uow)
        self._ledger = StockLedger(uow)

    def handle(
        self,
        barcode: str,
        quantity: int,
        product_id: str | None = None,
        expiration_date: datetime | None = None,
        campaign_id: str | None = None,
    ) -> StockItemDTO:
        """Record a received batch.

        When no product ID is given the barcode must already be known,
        either as a catalog ID or from an earlier batch.
        """
        resolved = product_id or self._catalog.resolve_product_id(barcode)
        item = self._ledger.receive(
            barcode=barcode,
            product_id=resolved,
            quantity=quantity,
            expiration_date=expiration_date,
            campaign_id=campaign_id,
        )
        return stock_item_to_dto(item)
