"""HTTP endpoints for the request lifecycle."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from lojasocial.application.accept_request import AcceptRequestHandler
from lojasocial.application.cancel_request import CancelRequestHandler
from lojasocial.application.complete_request import CompleteRequestHandler
from lojasocial.application.dto import RequestItemSpec
from lojasocial.application.list_requests import ListRequestsHandler
from lojasocial.application.propose_pickup_date import ProposePickupDateHandler
from lojasocial.application.reject_request import RejectRequestHandler
from lojasocial.application.show_request import ShowRequestHandler
from lojasocial.application.submit_request import SubmitRequestHandler
from lojasocial.domain.model.request import RequestStatus
from lojasocial.domain.repository.unit_of_work import UnitOfWork
from lojasocial.domain.service.notifier import Notifier
from lojasocial.infrastructure.api.dependencies import (
    get_app_settings,
    get_notifier,
    get_uow,
)
from lojasocial.infrastructure.api.schemas import (
    AcceptRequestIn,
    CancelRequestIn,
    CountOut,
    ProposeDateIn,
    RejectRequestIn,
    RequestOut,
    SubmitRequestIn,
    SubmitRequestOut,
    TransitionOut,
    as_utc,
)
from lojasocial.infrastructure.config import Settings

router = APIRouter(prefix="/requests", tags=["requests"])


@router.post("", response_model=SubmitRequestOut, status_code=status.HTTP_201_CREATED)
def submit_request(
    payload: SubmitRequestIn,
    uow: UnitOfWork = Depends(get_uow),
    notifier: Notifier = Depends(get_notifier),
    settings: Settings = Depends(get_app_settings),
):
    handler = SubmitRequestHandler(uow, notifier, max_items=settings.max_items_per_request)
    dto = handler.handle(
        user_id=payload.user_id,
        item_specs=[RequestItemSpec(i.product_id, i.quantity) for i in payload.items],
        proposed_delivery_date=payload.proposed_delivery_date,
    )
    return SubmitRequestOut(request_id=dto.id)


@router.get("", response_model=list[RequestOut])
def list_requests(
    user_id: str | None = Query(default=None, alias="userId"),
    request_status: RequestStatus | None = Query(default=None, alias="status"),
    uow: UnitOfWork = Depends(get_uow),
):
    dtos = ListRequestsHandler(uow).handle(user_id=user_id, status=request_status)
    return [RequestOut.model_validate(dto) for dto in dtos]


@router.get("/pending/count", response_model=CountOut)
def pending_count(uow: UnitOfWork = Depends(get_uow)):
    return CountOut(count=ListRequestsHandler(uow).pending_count())


@router.get("/pickups", response_model=list[RequestOut])
def weekly_pickups(
    start: datetime,
    end: datetime,
    uow: UnitOfWork = Depends(get_uow),
):
    dtos = ListRequestsHandler(uow).pickups_between(as_utc(start), as_utc(end))
    return [RequestOut.model_validate(dto) for dto in dtos]


@router.get("/{request_id}", response_model=RequestOut)
def show_request(request_id: str, uow: UnitOfWork = Depends(get_uow)):
    return RequestOut.model_validate(ShowRequestHandler(uow).handle(request_id))


@router.post("/{request_id}/accept", response_model=TransitionOut)
def accept_request(
    request_id: str,
    payload: AcceptRequestIn | None = None,
    uow: UnitOfWork = Depends(get_uow),
    notifier: Notifier = Depends(get_notifier),
):
    scheduled_date = payload.scheduled_date if payload is not None else None
    dto = AcceptRequestHandler(uow, notifier).handle(request_id, scheduled_date)
    return TransitionOut(request_id=dto.id, status=dto.status)


@router.post("/{request_id}/reject", response_model=TransitionOut)
def reject_request(
    request_id: str,
    payload: RejectRequestIn | None = None,
    uow: UnitOfWork = Depends(get_uow),
    notifier: Notifier = Depends(get_notifier),
):
    reason = payload.reason if payload is not None else None
    dto = RejectRequestHandler(uow, notifier).handle(request_id, reason)
    return TransitionOut(request_id=dto.id, status=dto.status)


@router.post("/{request_id}/complete", response_model=TransitionOut)
def complete_request(
    request_id: str,
    uow: UnitOfWork = Depends(get_uow),
    notifier: Notifier = Depends(get_notifier),
):
    dto = CompleteRequestHandler(uow, notifier).handle(request_id)
    return TransitionOut(request_id=dto.id, status=dto.status)


@router.post("/{request_id}/cancel", response_model=TransitionOut)
def cancel_request(
    request_id: str,
    payload: CancelRequestIn,
    uow: UnitOfWork = Depends(get_uow),
    notifier: Notifier = Depends(get_notifier),
):
    dto = CancelRequestHandler(uow, notifier).handle(request_id, requested_by=payload.user_id)
    return TransitionOut(request_id=dto.id, status=dto.status)


@router.post("/{request_id}/propose-date", response_model=RequestOut)
def propose_pickup_date(
    request_id: str,
    payload: ProposeDateIn,
    uow: UnitOfWork = Depends(get_uow),
    notifier: Notifier = Depends(get_notifier),
):
    dto = ProposePickupDateHandler(uow, notifier).handle(
        request_id,
        proposed_date=payload.date,
        by_employee=payload.by_employee,
        requested_by=payload.user_id,
    )
    return RequestOut.model_validate(dto)
