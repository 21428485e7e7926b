"""Request aggregate: a beneficiary's cart-to-pickup lifecycle.

The Request is an aggregate root that owns its item details. Status
changes are validated against an explicit transition table; the stock
side effects (release, commit) are coordinated by the application
handlers through the stock ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from lojasocial.domain.exceptions import (
    CapExceededError,
    EmptyCartError,
    InvalidTransitionError,
    NotOwnerError,
    ValidationError,
)
from lojasocial.domain.model.product import ProductCategory
from lojasocial.domain.model.value_objects import Quantity


class RequestStatus(Enum):
    SUBMITTED = "SUBMITTED"
    PENDING_PICKUP = "PENDING_PICKUP"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self]


ALLOWED_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.SUBMITTED: frozenset(
        {RequestStatus.PENDING_PICKUP, RequestStatus.REJECTED, RequestStatus.CANCELLED}
    ),
    RequestStatus.PENDING_PICKUP: frozenset(
        {RequestStatus.COMPLETED, RequestStatus.REJECTED, RequestStatus.CANCELLED}
    ),
    RequestStatus.COMPLETED: frozenset(),
    RequestStatus.REJECTED: frozenset(),
    RequestStatus.CANCELLED: frozenset(),
}

DEFAULT_MAX_ITEMS = 10


def check_cart_size(quantities: list[Quantity], max_items: int = DEFAULT_MAX_ITEMS) -> None:
    """Empty-cart and item-cap rules; the cap counts units, not lines."""
    if not quantities:
        raise EmptyCartError("Request must contain at least one item")

    total = sum(q.value for q in quantities)
    if total > max_items:
        raise CapExceededError(
            f"Maximum {max_items} items per request (got {total})"
        )


@dataclass(frozen=True)
class RequestItemDetail:
    """One product line of a request, with the category captured at submission."""

    product_id: str
    quantity: Quantity
    category_snapshot: ProductCategory


@dataclass
class Request:
    """Aggregate root for pickup requests.

    Use ``Request.create()`` for new requests; it enforces the cart rules.
    ``__init__`` stays simple so the repository can reconstitute persisted
    requests without re-validating.
    """

    id: str | None
    user_id: str
    items: list[RequestItemDetail]
    status: RequestStatus = RequestStatus.SUBMITTED
    submission_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    scheduled_pickup_date: datetime | None = None
    proposed_delivery_date: datetime | None = None
    rejection_reason: str | None = None
    reservation_ids: list[str] = field(default_factory=list)
    # Bumped by the repository on every save; guards concurrent updates
    version: int = 0

    # --- Factory (used for NEW requests only) ---------------------------------

    @staticmethod
    def create(
        user_id: str,
        items: list[RequestItemDetail],
        max_items: int = DEFAULT_MAX_ITEMS,
        proposed_delivery_date: datetime | None = None,
    ) -> Request:
        """Create a new request, enforcing the cart invariants."""
        if not user_id or not user_id.strip():
            raise ValidationError("User ID is required")

        check_cart_size([item.quantity for item in items], max_items)

        return Request(
            id=None,
            user_id=user_id.strip(),
            items=list(items),
            proposed_delivery_date=proposed_delivery_date,
        )

    # --- State transitions ----------------------------------------------------

    def accept(self, scheduled_date: datetime | None = None) -> None:
        """Transition SUBMITTED -> PENDING_PICKUP.

        Without an explicit date the beneficiary's own proposal is taken.
        """
        self._check_transition(RequestStatus.PENDING_PICKUP)
        pickup_date = scheduled_date or self.proposed_delivery_date
        if pickup_date is None:
            raise ValidationError(
                "A scheduled pickup date is required to accept this request"
            )
        self.scheduled_pickup_date = pickup_date
        self.status = RequestStatus.PENDING_PICKUP

    def reject(self, reason: str | None = None) -> None:
        """Transition SUBMITTED|PENDING_PICKUP -> REJECTED.

        The reservation must be released by the caller in the same
        transaction.
        """
        self._check_transition(RequestStatus.REJECTED)
        self.rejection_reason = reason.strip() if reason and reason.strip() else None
        self.status = RequestStatus.REJECTED

    def complete(self) -> None:
        """Transition PENDING_PICKUP -> COMPLETED (physical pickup happened)."""
        self._check_transition(RequestStatus.COMPLETED)
        self.status = RequestStatus.COMPLETED

    def cancel(self, requested_by: str) -> None:
        """Owner-only transition of any open request to CANCELLED."""
        if requested_by != self.user_id:
            raise NotOwnerError(
                f"Only the owner of request {self.id} may cancel it"
            )
        self._check_transition(RequestStatus.CANCELLED)
        self.status = RequestStatus.CANCELLED

    def propose_pickup_date(self, date: datetime, by_employee: bool) -> None:
        """Record a new pickup date proposal without changing status.

        An employee proposal becomes the scheduled date; a beneficiary
        proposal replaces it and waits for the employee to accept.
        """
        if self.status.is_terminal:
            raise InvalidTransitionError(
                f"Cannot propose a pickup date for a request in {self.status.value} status"
            )
        if by_employee:
            self.scheduled_pickup_date = date
            self.proposed_delivery_date = None
        else:
            self.proposed_delivery_date = date
            self.scheduled_pickup_date = None

    # --- Computed properties --------------------------------------------------

    @property
    def total_items(self) -> int:
        return sum(item.quantity.value for item in self.items)

    @property
    def is_open(self) -> bool:
        return not self.status.is_terminal

    # --- Internal helpers -----------------------------------------------------

    def _check_transition(self, target: RequestStatus) -> None:
        if target not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"Cannot move request {self.id} from {self.status.value} to {target.value}"
            )
