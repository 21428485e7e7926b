"""Abstract repository for ReservationPlan records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from lojasocial.domain.model.reservation import ReservationPlan


class ReservationRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a unique reservation ID."""

    @abstractmethod
    def get_by_id(self, reservation_id: str) -> ReservationPlan | None:
        """Return a reservation plan by its ID, or None."""

    @abstractmethod
    def save(self, plan: ReservationPlan) -> None:
        """Persist a new or updated reservation plan."""
