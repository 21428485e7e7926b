"""Application service: Reject Request use case.

Releases the request's reservations in the same transaction that moves
it to REJECTED, so the stock becomes available again immediately.
"""

from __future__ import annotations

from lojasocial.application.dto import RequestDTO, request_to_dto
from lojasocial.application.request_transition import RequestTransitionHandler
from lojasocial.domain.service.notifier import EventType


class RejectRequestHandler(RequestTransitionHandler):

    def handle(self, request_id: str, reason: str | None = None) -> RequestDTO:
        request = self._load(request_id)
        previous = request.status

        request.reject(reason)
        self._store(request, expected_status=previous, settle=self._ledger.release)

        self._publish(EventType.REQUEST_REJECTED, request, reason=request.rejection_reason)
        return request_to_dto(request)
