"""JSON-backed implementation of StockItemRepository."""

from __future__ import annotations

import uuid

from lojasocial.domain.model.stock_item import StockItem
from lojasocial.domain.repository.stock_item_repository import StockItemRepository
from lojasocial.infrastructure.persistence.json_records import (
    dump_datetime,
    find,
    load_datetime,
    upsert,
)


class JsonStockItemRepository(StockItemRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records

    # --- StockItemRepository interface ----------------------------------------

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_id(self, stock_item_id: str) -> StockItem | None:
        raw = find(self._records, stock_item_id)
        return self._to_domain(raw) if raw is not None else None

    def list_by_product_id(self, product_id: str) -> list[StockItem]:
        return [self._to_domain(raw) for raw in self._records if raw["product_id"] == product_id]

    def list_by_barcode(self, barcode: str) -> list[StockItem]:
        return [self._to_domain(raw) for raw in self._records if raw["barcode"] == barcode]

    def list_all(self) -> list[StockItem]:
        return [self._to_domain(raw) for raw in self._records]

    def save(self, item: StockItem) -> None:
        upsert(self._records, self._to_raw(item))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: StockItem) -> dict:
        return {
            "id": item.id,
            "barcode": item.barcode,
            "product_id": item.product_id,
            "campaign_id": item.campaign_id,
            "quantity": item.quantity,
            "reserved_quantity": item.reserved_quantity,
            "expiration_date": dump_datetime(item.expiration_date),
            "created_at": dump_datetime(item.created_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockItem:
        return StockItem(
            id=raw["id"],
            barcode=raw["barcode"],
            product_id=raw["product_id"],
            campaign_id=raw.get("campaign_id"),
            quantity=raw["quantity"],
            reserved_quantity=raw.get("reserved_quantity", 0),
            expiration_date=load_datetime(raw.get("expiration_date")),
            created_at=load_datetime(raw["created_at"]),
        )
