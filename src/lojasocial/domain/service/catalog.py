"""Domain service: Catalog.

Maps product identity to display metadata. Beneficiaries' apps may
refer to a product either by its catalog ID or by the barcode printed on
a received batch; ``resolve_product_id`` accepts both.
"""

from __future__ import annotations

import logging

from lojasocial.domain.exceptions import EntityNotFoundError, ValidationError
from lojasocial.domain.model.product import Product, ProductCategory
from lojasocial.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class Catalog:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def get_product(self, product_id: str) -> Product | None:
        with self._uow:
            return self._uow.products.get_by_id(product_id)

    def list_products(self) -> list[Product]:
        with self._uow:
            products = self._uow.products.list_all()
        return sorted(products, key=lambda p: (p.name.lower(), p.id))

    def register(
        self,
        product_id: str,
        name: str,
        brand: str = "",
        category: ProductCategory = ProductCategory.ALIMENTAR,
        image_url: str = "",
    ) -> Product:
        """Add a new product to the catalog."""
        product = Product.create(product_id, name, brand, category, image_url)
        with self._uow:
            if self._uow.products.get_by_id(product.id) is not None:
                raise ValidationError(f"Product '{product.id}' already exists")
            self._uow.products.save(product)
        logger.info("Registered product %s (%s)", product.id, product.name)
        return product

    def resolve_product_id(self, key: str) -> str:
        """Return the catalog ID for a product ID or a batch barcode."""
        with self._uow:
            if self._uow.products.get_by_id(key) is not None:
                return key
            for item in self._uow.stock_items.list_by_barcode(key):
                if self._uow.products.get_by_id(item.product_id) is not None:
                    return item.product_id
        raise EntityNotFoundError(f"Product not found: '{key}'")
