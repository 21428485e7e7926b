"""Pydantic request/response bodies for the HTTP API.

Field names are camelCase on the wire, matching the mobile client.
Naive datetimes sent by clients are interpreted as UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ===== REQUESTS =====

class RequestItemIn(CamelModel):
    product_id: str = Field(min_length=1)
    quantity: int


class SubmitRequestIn(CamelModel):
    user_id: str = Field(min_length=1)
    items: list[RequestItemIn]
    proposed_delivery_date: datetime | None = None

    @field_validator("proposed_delivery_date")
    @classmethod
    def ensure_utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)


class SubmitRequestOut(CamelModel):
    request_id: str


class AcceptRequestIn(CamelModel):
    scheduled_date: datetime | None = None

    @field_validator("scheduled_date")
    @classmethod
    def ensure_utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)


class RejectRequestIn(CamelModel):
    reason: str | None = None


class CancelRequestIn(CamelModel):
    user_id: str = Field(min_length=1)


class ProposeDateIn(CamelModel):
    date: datetime
    by_employee: bool = False
    user_id: str | None = None

    @field_validator("date")
    @classmethod
    def ensure_utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)


class TransitionOut(CamelModel):
    request_id: str
    status: str


class RequestItemOut(CamelModel):
    product_id: str
    quantity: int
    category: str


class RequestOut(CamelModel):
    id: str
    user_id: str
    status: str
    submission_date: datetime
    scheduled_pickup_date: datetime | None
    proposed_delivery_date: datetime | None
    rejection_reason: str | None
    total_items: int
    items: list[RequestItemOut]


class CountOut(CamelModel):
    count: int


# ===== CATALOG & STOCK =====

class ProductIn(CamelModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    brand: str = ""
    category: str | int = 1
    image_url: str = ""


class ProductOut(CamelModel):
    id: str
    name: str
    brand: str
    category: str
    image_url: str


class StockItemIn(CamelModel):
    barcode: str = Field(min_length=1)
    quantity: int
    product_id: str | None = None
    expiration_date: datetime | None = None
    campaign_id: str | None = None

    @field_validator("expiration_date")
    @classmethod
    def ensure_utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)


class StockItemOut(CamelModel):
    id: str
    barcode: str
    product_id: str
    campaign_id: str | None
    quantity: int
    reserved_quantity: int
    available_quantity: int
    expiration_date: datetime | None
    created_at: datetime


class ProductStockOut(CamelModel):
    product: ProductOut
    total: int
    reserved: int
    available: int
    batches: list[StockItemOut]


class ExpiringItemOut(CamelModel):
    stock_item: StockItemOut
    product: ProductOut | None
    days_until_expiration: int


class ExpirationCheckOut(CamelModel):
    days_threshold: int
    item_count: int
    notified: bool
