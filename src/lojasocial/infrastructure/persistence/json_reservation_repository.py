"""JSON-backed implementation of ReservationRepository."""

from __future__ import annotations

import uuid

from lojasocial.domain.model.reservation import (
    ReservationLine,
    ReservationPlan,
    ReservationStatus,
)
from lojasocial.domain.repository.reservation_repository import ReservationRepository
from lojasocial.infrastructure.persistence.json_records import (
    dump_datetime,
    find,
    load_datetime,
    upsert,
)


class JsonReservationRepository(ReservationRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_id(self, reservation_id: str) -> ReservationPlan | None:
        raw = find(self._records, reservation_id)
        return self._to_domain(raw) if raw is not None else None

    def save(self, plan: ReservationPlan) -> None:
        upsert(self._records, self._to_raw(plan))

    @staticmethod
    def _to_raw(plan: ReservationPlan) -> dict:
        return {
            "id": plan.id,
            "product_id": plan.product_id,
            "status": plan.status.value,
            "created_at": dump_datetime(plan.created_at),
            "lines": [
                {"stock_item_id": line.stock_item_id, "quantity": line.quantity}
                for line in plan.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> ReservationPlan:
        return ReservationPlan(
            id=raw["id"],
            product_id=raw["product_id"],
            status=ReservationStatus(raw["status"]),
            created_at=load_datetime(raw["created_at"]),
            lines=[
                ReservationLine(stock_item_id=line["stock_item_id"], quantity=line["quantity"])
                for line in raw["lines"]
            ],
        )
