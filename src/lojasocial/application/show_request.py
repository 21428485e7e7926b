"""Application service: Show Request use case (query)."""

from __future__ import annotations

from lojasocial.application.dto import RequestDTO, request_to_dto
from lojasocial.domain.exceptions import EntityNotFoundError
from lojasocial.domain.repository.unit_of_work import UnitOfWork


class ShowRequestHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, request_id: str) -> RequestDTO:
        with self._uow:
            request = self._uow.requests.get_by_id(request_id)
        if request is None:
            raise EntityNotFoundError(f"Request #{request_id} not found")
        return request_to_dto(request)
