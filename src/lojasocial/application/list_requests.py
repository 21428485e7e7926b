"""Application service: request listings for the employee and beneficiary views."""

from __future__ import annotations

from datetime import datetime

from lojasocial.application.dto import RequestDTO, request_to_dto
from lojasocial.domain.exceptions import ValidationError
from lojasocial.domain.model.request import Request, RequestStatus
from lojasocial.domain.repository.unit_of_work import UnitOfWork


class ListRequestsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: str | None = None,
        status: RequestStatus | None = None,
    ) -> list[RequestDTO]:
        """Requests newest first, optionally for one beneficiary and/or status."""
        requests = [
            r
            for r in self._all()
            if (user_id is None or r.user_id == user_id)
            and (status is None or r.status == status)
        ]
        requests.sort(key=lambda r: r.submission_date, reverse=True)
        return [request_to_dto(r) for r in requests]

    def pending_count(self) -> int:
        """Number of requests still waiting for an employee decision."""
        return sum(1 for r in self._all() if r.status == RequestStatus.SUBMITTED)

    def pickups_between(self, start: datetime, end: datetime) -> list[RequestDTO]:
        """Accepted requests scheduled for pickup in ``[start, end]``, soonest first."""
        if end < start:
            raise ValidationError("End of the pickup window is before its start")
        pickups = [
            r
            for r in self._all()
            if r.status == RequestStatus.PENDING_PICKUP
            and r.scheduled_pickup_date is not None
            and start <= r.scheduled_pickup_date <= end
        ]
        pickups.sort(key=lambda r: r.scheduled_pickup_date)
        return [request_to_dto(r) for r in pickups]

    def _all(self) -> list[Request]:
        with self._uow:
            return self._uow.requests.list_all()
