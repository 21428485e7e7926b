"""Application service: Add Product use case."""

from __future__ import annotations

from lojasocial.application.dto import ProductDTO, product_to_dto
from lojasocial.domain.model.product import ProductCategory
from lojasocial.domain.repository.unit_of_work import UnitOfWork
from lojasocial.domain.service.catalog import Catalog


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._catalog = Catalog(uow)

    def handle(
        self,
        product_id: str,
        name: str,
        brand: str = "",
        category: str | int = ProductCategory.ALIMENTAR.value,
        image_url: str = "",
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        product = self._catalog.register(
            product_id=product_id,
            name=name,
            brand=brand,
            category=ProductCategory.parse(category),
            image_url=image_url,
        )
        return product_to_dto(product)
