"""StockItem aggregate: one batch of a product received at one time.

Each batch carries its own expiry date and keeps two counters: how many
units were received and are still physically in store (``quantity``) and
how many of those are held by open requests (``reserved_quantity``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from lojasocial.domain.exceptions import InvariantViolationError, ValidationError


@dataclass
class StockItem:
    """Aggregate root for a stock batch.

    Invariants:
    - ``0 <= reserved_quantity <= quantity``
    - ``available_quantity`` is always >= 0

    The counters are only changed through ``reserve``, ``release`` and
    ``commit``, which the stock ledger calls inside a transaction.
    """

    id: str
    barcode: str
    product_id: str
    quantity: int
    reserved_quantity: int = 0
    campaign_id: str | None = None
    expiration_date: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def available_quantity(self) -> int:
        return self.quantity - self.reserved_quantity

    def expires_between(self, start: datetime, end: datetime) -> bool:
        if self.expiration_date is None:
            return False
        return start <= self.expiration_date <= end

    def days_until_expiration(self, now: datetime) -> int | None:
        """Whole days left before expiry, floored (0 = expires within a day)."""
        if self.expiration_date is None:
            return None
        return (self.expiration_date - now) // timedelta(days=1)

    def reserve(self, quantity: int) -> None:
        """Hold stock for an open request.

        Raises ValidationError if this batch cannot cover ``quantity``.
        """
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")
        if quantity > self.available_quantity:
            raise ValidationError(
                f"Cannot reserve {quantity} from batch {self.id} "
                f"(only {self.available_quantity} available)"
            )
        self.reserved_quantity += quantity

    def release(self, quantity: int) -> None:
        """Give back held stock (request rejected or cancelled)."""
        if quantity <= 0:
            raise ValidationError("Release quantity must be positive")
        if quantity > self.reserved_quantity:
            raise InvariantViolationError(
                f"Cannot release {quantity} from batch {self.id} "
                f"- only {self.reserved_quantity} currently reserved"
            )
        self.reserved_quantity -= quantity

    def commit(self, quantity: int) -> None:
        """Permanently deduct picked-up stock.

        Moves units from reserved to gone: both ``quantity`` and
        ``reserved_quantity`` decrease by the same amount.
        """
        if quantity <= 0:
            raise ValidationError("Commit quantity must be positive")
        if quantity > self.reserved_quantity:
            raise InvariantViolationError(
                f"Cannot commit {quantity} from batch {self.id} "
                f"- only {self.reserved_quantity} currently reserved"
            )
        self.reserved_quantity -= quantity
        self.quantity -= quantity
