"""HTTP endpoints for stock intake and expiry monitoring."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from lojasocial.application.check_expiring_items import (
    CheckExpiringItemsHandler,
    ShowExpiringItemsHandler,
)
from lojasocial.application.receive_stock import ReceiveStockHandler
from lojasocial.application.show_stock import ShowStockHandler
from lojasocial.domain.repository.unit_of_work import UnitOfWork
from lojasocial.domain.service.notifier import Notifier
from lojasocial.infrastructure.api.dependencies import (
    get_app_settings,
    get_notifier,
    get_uow,
)
from lojasocial.infrastructure.api.schemas import (
    ExpirationCheckOut,
    ExpiringItemOut,
    ProductStockOut,
    StockItemIn,
    StockItemOut,
)
from lojasocial.infrastructure.config import Settings

router = APIRouter(prefix="/stock", tags=["stock"])


@router.post("/items", response_model=StockItemOut, status_code=status.HTTP_201_CREATED)
def receive_stock(payload: StockItemIn, uow: UnitOfWork = Depends(get_uow)):
    dto = ReceiveStockHandler(uow).handle(
        barcode=payload.barcode,
        quantity=payload.quantity,
        product_id=payload.product_id,
        expiration_date=payload.expiration_date,
        campaign_id=payload.campaign_id,
    )
    return StockItemOut.model_validate(dto)


@router.get("/products/{product_id}", response_model=ProductStockOut)
def product_stock(product_id: str, uow: UnitOfWork = Depends(get_uow)):
    return ProductStockOut.model_validate(ShowStockHandler(uow).handle(product_id))


@router.get("/expiring", response_model=list[ExpiringItemOut])
def expiring_items(
    days: int | None = Query(default=None, ge=0),
    uow: UnitOfWork = Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
):
    handler = ShowExpiringItemsHandler(uow, default_days=settings.expiring_days_threshold)
    return [ExpiringItemOut.model_validate(dto) for dto in handler.handle(days)]


@router.post("/expiring/check", response_model=ExpirationCheckOut)
def check_expiring_items(
    days: int | None = Query(default=None, ge=0),
    uow: UnitOfWork = Depends(get_uow),
    notifier: Notifier = Depends(get_notifier),
    settings: Settings = Depends(get_app_settings),
):
    handler = CheckExpiringItemsHandler(
        uow, notifier, default_days=settings.expiring_days_threshold
    )
    return ExpirationCheckOut.model_validate(handler.handle(days))
