"""JSON-backed implementation of RequestRepository."""

from __future__ import annotations

import uuid

from lojasocial.domain.model.product import ProductCategory
from lojasocial.domain.model.request import (
    Request,
    RequestItemDetail,
    RequestStatus,
)
from lojasocial.domain.model.value_objects import Quantity
from lojasocial.domain.repository.request_repository import RequestRepository
from lojasocial.infrastructure.persistence.json_records import (
    dump_datetime,
    find,
    load_datetime,
    upsert,
)


class JsonRequestRepository(RequestRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records

    # --- RequestRepository interface ------------------------------------------

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_id(self, request_id: str) -> Request | None:
        raw = find(self._records, request_id)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Request]:
        return [self._to_domain(raw) for raw in self._records]

    def save(self, request: Request, expected_status: RequestStatus | None = None) -> None:
        if request.id is None:
            request.id = self.next_id()
        self._check_expected_status(self.get_by_id(request.id), request, expected_status)
        request.version += 1
        upsert(self._records, self._to_raw(request))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(request: Request) -> dict:
        return {
            "id": request.id,
            "user_id": request.user_id,
            "status": request.status.value,
            "submission_date": dump_datetime(request.submission_date),
            "scheduled_pickup_date": dump_datetime(request.scheduled_pickup_date),
            "proposed_delivery_date": dump_datetime(request.proposed_delivery_date),
            "rejection_reason": request.rejection_reason,
            "reservation_ids": list(request.reservation_ids),
            "version": request.version,
            "items": [
                {
                    "product_id": item.product_id,
                    "quantity": item.quantity.value,
                    "category": item.category_snapshot.value,
                }
                for item in request.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Request:
        items = [
            RequestItemDetail(
                product_id=i["product_id"],
                quantity=Quantity(i["quantity"]),
                category_snapshot=ProductCategory(i["category"]),
            )
            for i in raw["items"]
        ]
        return Request(
            id=raw["id"],
            user_id=raw["user_id"],
            items=items,
            status=RequestStatus(raw["status"]),
            submission_date=load_datetime(raw["submission_date"]),
            scheduled_pickup_date=load_datetime(raw.get("scheduled_pickup_date")),
            proposed_delivery_date=load_datetime(raw.get("proposed_delivery_date")),
            rejection_reason=raw.get("rejection_reason"),
            reservation_ids=list(raw.get("reservation_ids", [])),
            version=raw.get("version", 0),
        )
