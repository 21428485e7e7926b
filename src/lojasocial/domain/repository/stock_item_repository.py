"""Abstract repository for StockItem batches."""

from __future__ import annotations

from abc import ABC, abstractmethod

from lojasocial.domain.model.stock_item import StockItem


class StockItemRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a unique batch ID."""

    @abstractmethod
    def get_by_id(self, stock_item_id: str) -> StockItem | None:
        """Return a batch by its ID, or None."""

    @abstractmethod
    def list_by_product_id(self, product_id: str) -> list[StockItem]:
        """Return every batch of a product."""

    @abstractmethod
    def list_by_barcode(self, barcode: str) -> list[StockItem]:
        """Return every batch received under a barcode."""

    @abstractmethod
    def list_all(self) -> list[StockItem]:
        """Return every batch."""

    @abstractmethod
    def save(self, item: StockItem) -> None:
        """Persist a new or updated batch."""
