"""HTTP endpoints for the product catalog."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from lojasocial.application.add_product import AddProductHandler
from lojasocial.application.dto import product_to_dto
from lojasocial.domain.exceptions import EntityNotFoundError
from lojasocial.domain.repository.unit_of_work import UnitOfWork
from lojasocial.domain.service.catalog import Catalog
from lojasocial.infrastructure.api.dependencies import get_uow
from lojasocial.infrastructure.api.schemas import ProductIn, ProductOut

router = APIRouter(prefix="/products", tags=["products"])


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def add_product(payload: ProductIn, uow: UnitOfWork = Depends(get_uow)):
    dto = AddProductHandler(uow).handle(
        product_id=payload.id,
        name=payload.name,
        brand=payload.brand,
        category=payload.category,
        image_url=payload.image_url,
    )
    return ProductOut.model_validate(dto)


@router.get("", response_model=list[ProductOut])
def list_products(uow: UnitOfWork = Depends(get_uow)):
    return [ProductOut.model_validate(product_to_dto(p)) for p in Catalog(uow).list_products()]


@router.get("/{product_id}", response_model=ProductOut)
def show_product(product_id: str, uow: UnitOfWork = Depends(get_uow)):
    product = Catalog(uow).get_product(product_id)
    if product is None:
        raise EntityNotFoundError(f"Product not found: '{product_id}'")
    return ProductOut.model_validate(product_to_dto(product))
