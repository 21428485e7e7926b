"""Application service: Complete Request use case.

The beneficiary picked the goods up: the only transition that debits
``StockItem.quantity``, by committing every reservation of the request.
"""

from __future__ import annotations

from lojasocial.application.dto import RequestDTO, request_to_dto
from lojasocial.application.request_transition import RequestTransitionHandler
from lojasocial.domain.service.notifier import EventType


class CompleteRequestHandler(RequestTransitionHandler):

    def handle(self, request_id: str) -> RequestDTO:
        request = self._load(request_id)
        previous = request.status

        request.complete()
        self._store(request, expected_status=previous, settle=self._ledger.commit)

        self._publish(EventType.REQUEST_COMPLETED, request)
        return request_to_dto(request)
