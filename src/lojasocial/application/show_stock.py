"""Application service: Show Stock use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from lojasocial.application.dto import (
    ProductDTO,
    StockItemDTO,
    product_to_dto,
    stock_item_to_dto,
)
from lojasocial.domain.exceptions import EntityNotFoundError
from lojasocial.domain.repository.unit_of_work import UnitOfWork
from lojasocial.domain.service.catalog import Catalog
from lojasocial.domain.service.stock_ledger import StockLedger


@dataclass(frozen=True)
class ProductStockDTO:
    product: ProductDTO
    total: int
    reserved: int
    available: int
    batches: list[StockItemDTO]


class ShowStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._catalog = Catalog(uow)
        self._ledger = StockLedger(uow)

    def handle(self, product_id: str) -> ProductStockDTO:
        product = self._catalog.get_product(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_id}'")
        return self._summarize(product_id, product_to_dto(product))

    def handle_all(self) -> list[ProductStockDTO]:
        return [
            self._summarize(product.id, product_to_dto(product))
            for product in self._catalog.list_products()
        ]

    def _summarize(self, product_id: str, product: ProductDTO) -> ProductStockDTO:
        batches = self._ledger.list_batches(product_id)
        return ProductStockDTO(
            product=product,
            total=sum(b.quantity for b in batches),
            reserved=sum(b.reserved_quantity for b in batches),
            available=sum(b.available_quantity for b in batches),
            batches=[stock_item_to_dto(b) for b in batches],
        )
