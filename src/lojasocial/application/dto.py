"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI / HTTP layers and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from lojasocial.domain.model.expiring_item import ExpiringItemWithProduct
from lojasocial.domain.model.product import Product
from lojasocial.domain.model.request import Request
from lojasocial.domain.model.stock_item import StockItem


@dataclass(frozen=True)
class RequestItemSpec:
    """Input: what the beneficiary put in the cart (product ID or barcode + quantity)."""

    product_key: str
    quantity: int


@dataclass(frozen=True)
class RequestItemDTO:
    product_id: str
    quantity: int
    category: str


@dataclass(frozen=True)
class RequestDTO:
    id: str
    user_id: str
    status: str
    submission_date: datetime
    scheduled_pickup_date: datetime | None
    proposed_delivery_date: datetime | None
    rejection_reason: str | None
    total_items: int
    items: list[RequestItemDTO]


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    brand: str
    category: str
    image_url: str


@dataclass(frozen=True)
class StockItemDTO:
    id: str
    barcode: str
    product_id: str
    campaign_id: str | None
    quantity: int
    reserved_quantity: int
    available_quantity: int
    expiration_date: datetime | None
    created_at: datetime


@dataclass(frozen=True)
class ExpiringItemDTO:
    stock_item: StockItemDTO
    product: ProductDTO | None
    days_until_expiration: int


# --- Mapping ------------------------------------------------------------------


def request_to_dto(request: Request) -> RequestDTO:
    return RequestDTO(
        id=request.id,  # type: ignore[arg-type]
        user_id=request.user_id,
        status=request.status.value,
        submission_date=request.submission_date,
        scheduled_pickup_date=request.scheduled_pickup_date,
        proposed_delivery_date=request.proposed_delivery_date,
        rejection_reason=request.rejection_reason,
        total_items=request.total_items,
        items=[
            RequestItemDTO(
                product_id=item.product_id,
                quantity=item.quantity.value,
                category=item.category_snapshot.display_name,
            )
            for item in request.items
        ],
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        brand=product.brand,
        category=product.category.display_name,
        image_url=product.image_url,
    )


def stock_item_to_dto(item: StockItem) -> StockItemDTO:
    return StockItemDTO(
        id=item.id,
        barcode=item.barcode,
        product_id=item.product_id,
        campaign_id=item.campaign_id,
        quantity=item.quantity,
        reserved_quantity=item.reserved_quantity,
        available_quantity=item.available_quantity,
        expiration_date=item.expiration_date,
        created_at=item.created_at,
    )


def expiring_item_to_dto(entry: ExpiringItemWithProduct) -> ExpiringItemDTO:
    return ExpiringItemDTO(
        stock_item=stock_item_to_dto(entry.stock_item),
        product=product_to_dto(entry.product) if entry.product is not None else None,
        days_until_expiration=entry.days_until_expiration,
    )
