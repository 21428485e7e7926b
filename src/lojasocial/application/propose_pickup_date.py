"""Application service: Propose Pickup Date use case.

Employees and beneficiaries negotiate the pickup date while a request is
open. The status does not change; the compare-and-swap still guards
against racing with a transition.
"""

from __future__ import annotations

from datetime import datetime

from lojasocial.application.dto import RequestDTO, request_to_dto
from lojasocial.application.request_transition import RequestTransitionHandler
from lojasocial.domain.exceptions import NotOwnerError
from lojasocial.domain.service.notifier import EventType


class ProposePickupDateHandler(RequestTransitionHandler):

    def handle(
        self,
        request_id: str,
        proposed_date: datetime,
        by_employee: bool,
        requested_by: str | None = None,
    ) -> RequestDTO:
        request = self._load(request_id)
        if not by_employee and requested_by != request.user_id:
            raise NotOwnerError(
                f"Only the owner of request {request_id} may propose a delivery date"
            )
        previous = request.status

        request.propose_pickup_date(proposed_date, by_employee=by_employee)
        self._store(request, expected_status=previous)

        self._publish(
            EventType.PICKUP_DATE_PROPOSED,
            request,
            proposedDate=proposed_date.isoformat(),
            byEmployee=by_employee,
        )
        return request_to_dto(request)
