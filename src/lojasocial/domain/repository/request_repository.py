"""Abstract repository for the Request aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from lojasocial.domain.exceptions import InvalidTransitionError
from lojasocial.domain.model.request import Request, RequestStatus


class RequestRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a unique request ID."""

    @abstractmethod
    def get_by_id(self, request_id: str) -> Request | None:
        """Return a request by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Request]:
        """Return every request."""

    @abstractmethod
    def save(self, request: Request, expected_status: RequestStatus | None = None) -> None:
        """Persist a new or updated request.

        When ``expected_status`` is given the stored request must still be
        in that status and at the same ``version`` the caller read,
        otherwise InvalidTransitionError is raised and nothing is written
        (compare-and-swap). Every save increments ``request.version``.
        """

    # --- Shared helpers -------------------------------------------------------

    @staticmethod
    def _check_expected_status(
        stored: Request | None,
        request: Request,
        expected_status: RequestStatus | None,
    ) -> None:
        if expected_status is None:
            return
        if stored is None or stored.status != expected_status:
            observed = stored.status.value if stored is not None else "missing"
            raise InvalidTransitionError(
                f"Request {request.id} changed concurrently "
                f"(expected {expected_status.value}, found {observed})"
            )
        if stored.version != request.version:
            raise InvalidTransitionError(
                f"Request {request.id} changed concurrently "
                f"(read version {request.version}, found {stored.version})"
            )
