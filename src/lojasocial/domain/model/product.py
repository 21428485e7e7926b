"""Product aggregate.

Products are catalog reference data shared by many stock batches. Once
registered they are not mutated by the reservation workflow.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from lojasocial.domain.exceptions import ValidationError


class ProductCategory(Enum):
    ALIMENTAR = 1
    CASA = 2
    HIGIENE_PESSOAL = 3

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @staticmethod
    def parse(raw: str | int) -> ProductCategory:
        """Accept the numeric code, the enum name or the display name."""
        if isinstance(raw, int):
            try:
                return ProductCategory(raw)
            except ValueError as exc:
                raise ValidationError(f"Unknown product category: {raw!r}") from exc
        text = str(raw).strip()
        if text.isdigit():
            return ProductCategory.parse(int(text))
        normalized = text.upper().replace(" ", "_")
        for category in ProductCategory:
            if normalized in (category.name, category.display_name.upper().replace(" ", "_")):
                return category
        raise ValidationError(f"Unknown product category: {raw!r}")


_DISPLAY_NAMES = {
    ProductCategory.ALIMENTAR: "Alimentar",
    ProductCategory.CASA: "Casa",
    ProductCategory.HIGIENE_PESSOAL: "Higiene Pessoal",
}


@dataclass(frozen=True)
class Product:
    """A product in the catalog."""

    id: str
    name: str
    brand: str = ""
    category: ProductCategory = ProductCategory.ALIMENTAR
    image_url: str = ""

    @staticmethod
    def create(
        product_id: str,
        name: str,
        brand: str = "",
        category: ProductCategory = ProductCategory.ALIMENTAR,
        image_url: str = "",
    ) -> Product:
        """Create a new catalog entry, enforcing required fields."""
        if not product_id or not product_id.strip():
            raise ValidationError("Product ID is required")
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        return Product(
            id=product_id.strip(),
            name=name.strip(),
            brand=brand.strip(),
            category=category,
            image_url=image_url.strip(),
        )
