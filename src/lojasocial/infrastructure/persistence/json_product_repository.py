"""JSON-backed implementation of ProductRepository."""

from __future__ import annotations

from lojasocial.domain.model.product import Product, ProductCategory
from lojasocial.domain.repository.product_repository import ProductRepository
from lojasocial.infrastructure.persistence.json_records import find, upsert


class JsonProductRepository(ProductRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        raw = find(self._records, product_id)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._records]

    def save(self, product: Product) -> None:
        upsert(self._records, self._to_raw(product))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "brand": product.brand,
            "category": product.category.value,
            "image_url": product.image_url,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            brand=raw.get("brand", ""),
            category=ProductCategory(raw.get("category", ProductCategory.ALIMENTAR.value)),
            image_url=raw.get("image_url", ""),
        )
