"""Application service: Cancel Request use case.

Only the beneficiary who submitted the request may cancel it. Any open
request can be cancelled; its reservations are released.
"""

from __future__ import annotations

from lojasocial.application.dto import RequestDTO, request_to_dto
from lojasocial.application.request_transition import RequestTransitionHandler
from lojasocial.domain.service.notifier import EventType


class CancelRequestHandler(RequestTransitionHandler):

    def handle(self, request_id: str, requested_by: str) -> RequestDTO:
        request = self._load(request_id)
        previous = request.status

        request.cancel(requested_by)
        self._store(request, expected_status=previous, settle=self._ledger.release)

        self._publish(EventType.REQUEST_CANCELLED, request, cancelledBy=requested_by)
        return request_to_dto(request)
