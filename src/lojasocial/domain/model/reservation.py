"""ReservationPlan: the stock ledger's record of a hold on one product.

A plan lists which batches were touched by a ``reserve`` call and by how
much. It is settled exactly once, either released (stock goes back to
available) or committed (stock leaves the store).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from lojasocial.domain.exceptions import InvariantViolationError


class ReservationStatus(Enum):
    ACTIVE = "ACTIVE"
    RELEASED = "RELEASED"
    COMMITTED = "COMMITTED"


@dataclass(frozen=True)
class ReservationLine:
    stock_item_id: str
    quantity: int


@dataclass
class ReservationPlan:
    id: str
    product_id: str
    lines: list[ReservationLine]
    status: ReservationStatus = ReservationStatus.ACTIVE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)

    def mark_released(self) -> None:
        if self.status == ReservationStatus.COMMITTED:
            raise InvariantViolationError(
                f"Reservation {self.id} was already committed and cannot be released"
            )
        self.status = ReservationStatus.RELEASED

    def mark_committed(self) -> None:
        if self.status == ReservationStatus.RELEASED:
            raise InvariantViolationError(
                f"Reservation {self.id} was released and cannot be committed"
            )
        self.status = ReservationStatus.COMMITTED
