"""Unit tests for the Request aggregate and its lifecycle rules."""

from datetime import datetime, timedelta, timezone

import pytest

from lojasocial.domain.exceptions import (
    CapExceededError,
    EmptyCartError,
    InvalidTransitionError,
    NotOwnerError,
    ValidationError,
)
from lojasocial.domain.model.product import ProductCategory
from lojasocial.domain.model.request import Request, RequestItemDetail, RequestStatus
from lojasocial.domain.model.value_objects import Quantity

PICKUP = datetime(2025, 3, 14, 10, 0, tzinfo=timezone.utc)


def _make_item(product_id: str = "arroz", qty: int = 1) -> RequestItemDetail:
    """Helper to build a valid item detail."""
    return RequestItemDetail(
        product_id=product_id,
        quantity=Quantity(qty),
        category_snapshot=ProductCategory.ALIMENTAR,
    )


def _make_request(status: RequestStatus = RequestStatus.SUBMITTED) -> Request:
    request = Request.create("ana", [_make_item(qty=2)])
    request.id = "req-1"
    request.status = status
    return request


class TestRequestCreation:

    def test_happy_path(self):
        request = Request.create("ana", [_make_item("arroz", 2), _make_item("leite", 3)])
        assert request.status == RequestStatus.SUBMITTED
        assert request.total_items == 5
        assert request.id is None  # assigned by repository
        assert request.scheduled_pickup_date is None

    def test_empty_cart_rejected(self):
        with pytest.raises(EmptyCartError, match="at least one item"):
            Request.create("ana", [])

    def test_cap_counts_quantities_not_lines(self):
        with pytest.raises(CapExceededError, match="Maximum 10 items"):
            Request.create("ana", [_make_item("arroz", 6), _make_item("leite", 5)])

    def test_cap_boundary_accepted(self):
        request = Request.create("ana", [_make_item("arroz", 10)])
        assert request.total_items == 10

    def test_custom_cap(self):
        with pytest.raises(CapExceededError):
            Request.create("ana", [_make_item(qty=3)], max_items=2)

    def test_user_required(self):
        with pytest.raises(ValidationError, match="User ID is required"):
            Request.create(" ", [_make_item()])

    def test_cap_error_is_a_validation_error(self):
        assert issubclass(CapExceededError, ValidationError)
        assert issubclass(EmptyCartError, ValidationError)


class TestAccept:

    def test_accept_sets_pickup_date(self):
        request = _make_request()
        request.accept(PICKUP)
        assert request.status == RequestStatus.PENDING_PICKUP
        assert request.scheduled_pickup_date == PICKUP

    def test_accept_falls_back_to_proposed_date(self):
        request = _make_request()
        request.proposed_delivery_date = PICKUP
        request.accept()
        assert request.scheduled_pickup_date == PICKUP

    def test_accept_without_any_date_rejected(self):
        request = _make_request()
        with pytest.raises(ValidationError, match="pickup date is required"):
            request.accept()
        assert request.status == RequestStatus.SUBMITTED

    def test_accept_twice_rejected(self):
        request = _make_request(RequestStatus.PENDING_PICKUP)
        with pytest.raises(InvalidTransitionError, match="PENDING_PICKUP to PENDING_PICKUP"):
            request.accept(PICKUP)

    def test_accept_rejected_request_fails(self):
        request = _make_request(RequestStatus.REJECTED)
        with pytest.raises(InvalidTransitionError):
            request.accept(PICKUP)


class TestRejectCompleteCancel:

    def test_reject_from_submitted(self):
        request = _make_request()
        request.reject("  Fora de horário  ")
        assert request.status == RequestStatus.REJECTED
        assert request.rejection_reason == "Fora de horário"

    def test_reject_from_pending_pickup(self):
        request = _make_request(RequestStatus.PENDING_PICKUP)
        request.reject()
        assert request.status == RequestStatus.REJECTED
        assert request.rejection_reason is None

    def test_complete_requires_pending_pickup(self):
        request = _make_request()
        with pytest.raises(InvalidTransitionError, match="SUBMITTED to COMPLETED"):
            request.complete()

    def test_complete(self):
        request = _make_request(RequestStatus.PENDING_PICKUP)
        request.complete()
        assert request.status == RequestStatus.COMPLETED

    def test_cancel_by_owner(self):
        request = _make_request(RequestStatus.PENDING_PICKUP)
        request.cancel("ana")
        assert request.status == RequestStatus.CANCELLED

    def test_cancel_by_other_user_rejected(self):
        request = _make_request()
        with pytest.raises(NotOwnerError):
            request.cancel("bruno")
        assert request.status == RequestStatus.SUBMITTED

    def test_ownership_checked_before_transition(self):
        request = _make_request(RequestStatus.COMPLETED)
        with pytest.raises(NotOwnerError):
            request.cancel("bruno")

    @pytest.mark.parametrize(
        "status",
        [RequestStatus.COMPLETED, RequestStatus.REJECTED, RequestStatus.CANCELLED],
    )
    def test_terminal_states_allow_nothing(self, status):
        request = _make_request(status)
        for transition in (request.complete, lambda: request.reject("x"), lambda: request.cancel("ana")):
            with pytest.raises(InvalidTransitionError):
                transition()
        assert request.status == status


class TestProposePickupDate:

    def test_employee_proposal_becomes_scheduled_date(self):
        request = _make_request()
        request.proposed_delivery_date = PICKUP
        request.propose_pickup_date(PICKUP + timedelta(days=1), by_employee=True)
        assert request.scheduled_pickup_date == PICKUP + timedelta(days=1)
        assert request.proposed_delivery_date is None
        assert request.status == RequestStatus.SUBMITTED

    def test_beneficiary_proposal_replaces_scheduled_date(self):
        request = _make_request(RequestStatus.PENDING_PICKUP)
        request.scheduled_pickup_date = PICKUP
        request.propose_pickup_date(PICKUP + timedelta(days=2), by_employee=False)
        assert request.proposed_delivery_date == PICKUP + timedelta(days=2)
        assert request.scheduled_pickup_date is None
        assert request.status == RequestStatus.PENDING_PICKUP

    def test_closed_request_rejected(self):
        request = _make_request(RequestStatus.CANCELLED)
        with pytest.raises(InvalidTransitionError, match="CANCELLED"):
            request.propose_pickup_date(PICKUP, by_employee=True)
