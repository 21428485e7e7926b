"""Application service: Accept Request use case (SUBMITTED -> PENDING_PICKUP)."""

from __future__ import annotations

from datetime import datetime

from lojasocial.application.dto import RequestDTO, request_to_dto
from lojasocial.application.request_transition import RequestTransitionHandler
from lojasocial.domain.service.notifier import EventType


class AcceptRequestHandler(RequestTransitionHandler):

    def handle(self, request_id: str, scheduled_date: datetime | None = None) -> RequestDTO:
        """Accept a request and fix its pickup date.

        Without ``scheduled_date`` the beneficiary's proposed date is used.
        Stock stays reserved; nothing is deducted until pickup.
        """
        request = self._load(request_id)
        previous = request.status

        request.accept(scheduled_date)
        self._store(request, expected_status=previous)

        self._publish(
            EventType.REQUEST_ACCEPTED,
            request,
            scheduledPickupDate=request.scheduled_pickup_date.isoformat(),
        )
        return request_to_dto(request)
