"""Integration tests for the accept / reject / complete / cancel use cases."""

from datetime import timedelta

import pytest

from lojasocial.application.accept_request import AcceptRequestHandler
from lojasocial.application.cancel_request import CancelRequestHandler
from lojasocial.application.complete_request import CompleteRequestHandler
from lojasocial.application.dto import RequestItemSpec
from lojasocial.application.propose_pickup_date import ProposePickupDateHandler
from lojasocial.application.reject_request import RejectRequestHandler
from lojasocial.application.submit_request import SubmitRequestHandler
from lojasocial.domain.exceptions import (
    EntityNotFoundError,
    InvalidTransitionError,
    InvariantViolationError,
    NotOwnerError,
    ValidationError,
)
from lojasocial.domain.model.request import RequestStatus
from lojasocial.domain.model.reservation import ReservationStatus
from lojasocial.domain.service.notifier import EventType
from lojasocial.domain.service.stock_ledger import StockLedger
from tests.fakes import (
    NOW,
    FailingNotifier,
    FakeUnitOfWork,
    RecordingNotifier,
    add_batch,
    add_product,
)

PICKUP = NOW + timedelta(days=3)


def _setup(notifier=None):
    uow = FakeUnitOfWork()
    add_product(uow, "arroz")
    add_product(uow, "leite")
    add_batch(uow, "arroz", 5, expires_in_days=4)
    add_batch(uow, "leite", 6, expires_in_days=8)
    notifier = notifier or RecordingNotifier()
    dto = SubmitRequestHandler(uow, notifier).handle(
        "ana", [RequestItemSpec("arroz", 2), RequestItemSpec("leite", 3)]
    )
    return uow, notifier, dto.id


def _status(uow: FakeUnitOfWork, request_id: str) -> RequestStatus:
    return uow.requests.get_by_id(request_id).status


def _available(uow: FakeUnitOfWork) -> tuple[int, int]:
    ledger = StockLedger(uow)
    return ledger.available_for("arroz"), ledger.available_for("leite")


def _on_hand(uow: FakeUnitOfWork) -> int:
    return sum(i.quantity for i in uow.stock_items.list_all())


class TestAccept:

    def test_accept_schedules_pickup_and_keeps_stock_reserved(self):
        uow, notifier, request_id = _setup()

        dto = AcceptRequestHandler(uow, notifier).handle(request_id, PICKUP)

        assert dto.status == RequestStatus.PENDING_PICKUP.value
        assert dto.scheduled_pickup_date == PICKUP
        assert _available(uow) == (3, 3)
        assert notifier.events[-1] == (
            EventType.REQUEST_ACCEPTED,
            {
                "requestId": request_id,
                "userId": "ana",
                "status": "PENDING_PICKUP",
                "scheduledPickupDate": PICKUP.isoformat(),
            },
        )

    def test_accept_uses_beneficiary_proposal(self):
        uow, notifier, request_id = _setup()
        ProposePickupDateHandler(uow, notifier).handle(
            request_id, PICKUP, by_employee=False, requested_by="ana"
        )

        dto = AcceptRequestHandler(uow, notifier).handle(request_id)

        assert dto.scheduled_pickup_date == PICKUP

    def test_accept_without_date_rejected(self):
        uow, notifier, request_id = _setup()
        with pytest.raises(ValidationError):
            AcceptRequestHandler(uow, notifier).handle(request_id)
        assert _status(uow, request_id) == RequestStatus.SUBMITTED

    def test_accept_rejected_request_fails(self):
        uow, notifier, request_id = _setup()
        RejectRequestHandler(uow, notifier).handle(request_id, "Sem stock")
        events = len(notifier.events)

        with pytest.raises(InvalidTransitionError):
            AcceptRequestHandler(uow, notifier).handle(request_id, PICKUP)

        assert _status(uow, request_id) == RequestStatus.REJECTED
        assert len(notifier.events) == events

    def test_unknown_request(self):
        uow, notifier, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            AcceptRequestHandler(uow, notifier).handle("req-404", PICKUP)


class TestReject:

    def test_reject_releases_reservations(self):
        uow, notifier, request_id = _setup()
        assert _available(uow) == (3, 3)

        dto = RejectRequestHandler(uow, notifier).handle(request_id, "Fora do horário")

        assert dto.status == RequestStatus.REJECTED.value
        assert dto.rejection_reason == "Fora do horário"
        assert _available(uow) == (5, 6)
        request = uow.requests.get_by_id(request_id)
        ledger = StockLedger(uow)
        assert all(
            ledger.get_reservation(r).status == ReservationStatus.RELEASED
            for r in request.reservation_ids
        )

    def test_reject_after_accept_releases_too(self):
        uow, notifier, request_id = _setup()
        AcceptRequestHandler(uow, notifier).handle(request_id, PICKUP)

        RejectRequestHandler(uow, notifier).handle(request_id)

        assert _available(uow) == (5, 6)


class TestComplete:

    def test_complete_commits_stock(self):
        uow, notifier, request_id = _setup()
        AcceptRequestHandler(uow, notifier).handle(request_id, PICKUP)
        before = _on_hand(uow)

        dto = CompleteRequestHandler(uow, notifier).handle(request_id)

        assert dto.status == RequestStatus.COMPLETED.value
        assert _on_hand(uow) == before - 5
        assert _available(uow) == (3, 3)
        assert all(i.reserved_quantity == 0 for i in uow.stock_items.list_all())
        assert notifier.types()[-1] == EventType.REQUEST_COMPLETED

    def test_complete_submitted_request_fails(self):
        uow, notifier, request_id = _setup()
        with pytest.raises(InvalidTransitionError):
            CompleteRequestHandler(uow, notifier).handle(request_id)
        assert _on_hand(uow) == 11

    def test_complete_twice_fails_and_deducts_once(self):
        uow, notifier, request_id = _setup()
        AcceptRequestHandler(uow, notifier).handle(request_id, PICKUP)
        CompleteRequestHandler(uow, notifier).handle(request_id)

        with pytest.raises(InvalidTransitionError):
            CompleteRequestHandler(uow, notifier).handle(request_id)

        assert _on_hand(uow) == 6


class TestCancel:

    def test_owner_cancel_releases(self):
        uow, notifier, request_id = _setup()

        dto = CancelRequestHandler(uow, notifier).handle(request_id, requested_by="ana")

        assert dto.status == RequestStatus.CANCELLED.value
        assert _available(uow) == (5, 6)
        assert notifier.events[-1][1]["cancelledBy"] == "ana"

    def test_non_owner_cancel_changes_nothing(self):
        uow, notifier, request_id = _setup()
        events = len(notifier.events)

        with pytest.raises(NotOwnerError):
            CancelRequestHandler(uow, notifier).handle(request_id, requested_by="bruno")

        assert _status(uow, request_id) == RequestStatus.SUBMITTED
        assert _available(uow) == (3, 3)
        assert len(notifier.events) == events

    def test_cancel_completed_request_fails(self):
        uow, notifier, request_id = _setup()
        AcceptRequestHandler(uow, notifier).handle(request_id, PICKUP)
        CompleteRequestHandler(uow, notifier).handle(request_id)

        with pytest.raises(InvalidTransitionError):
            CancelRequestHandler(uow, notifier).handle(request_id, requested_by="ana")


class TestProposePickupDate:

    def test_employee_proposal_sets_scheduled_date(self):
        uow, notifier, request_id = _setup()

        dto = ProposePickupDateHandler(uow, notifier).handle(request_id, PICKUP, by_employee=True)

        assert dto.scheduled_pickup_date == PICKUP
        assert dto.status == RequestStatus.SUBMITTED.value
        assert notifier.types()[-1] == EventType.PICKUP_DATE_PROPOSED

    def test_other_beneficiary_cannot_propose(self):
        uow, notifier, request_id = _setup()
        with pytest.raises(NotOwnerError):
            ProposePickupDateHandler(uow, notifier).handle(
                request_id, PICKUP, by_employee=False, requested_by="bruno"
            )


class TestConcurrencyAndNotifications:

    def test_stale_transition_is_rejected(self):
        uow, notifier, request_id = _setup()
        accept = AcceptRequestHandler(uow, notifier)
        cancel = CancelRequestHandler(uow, notifier)

        # Read the request as the employee would, then let the owner cancel first
        stale = accept._load(request_id)
        cancel.handle(request_id, requested_by="ana")
        stale.accept(PICKUP)

        with pytest.raises(InvalidTransitionError, match="changed concurrently"):
            accept._store(stale, expected_status=RequestStatus.SUBMITTED)

        assert _status(uow, request_id) == RequestStatus.CANCELLED
        assert _available(uow) == (5, 6)

    def test_stale_date_change_is_rejected(self):
        uow, notifier, request_id = _setup()
        accept = AcceptRequestHandler(uow, notifier)
        propose = ProposePickupDateHandler(uow, notifier)

        # Both read the SUBMITTED request; the date proposal is saved first
        stale = accept._load(request_id)
        propose.handle(request_id, PICKUP + timedelta(days=1), by_employee=True)
        stale.accept(PICKUP)

        with pytest.raises(InvalidTransitionError, match="read version"):
            accept._store(stale, expected_status=RequestStatus.SUBMITTED)

        stored = uow.requests.get_by_id(request_id)
        assert stored.status == RequestStatus.SUBMITTED
        assert stored.scheduled_pickup_date == PICKUP + timedelta(days=1)

    def test_failed_settlement_rolls_back_status_change(self):
        uow, notifier, request_id = _setup()
        AcceptRequestHandler(uow, notifier).handle(request_id, PICKUP)
        request = uow.requests.get_by_id(request_id)
        StockLedger(uow).release(request.reservation_ids[0])

        with pytest.raises(InvariantViolationError):
            CompleteRequestHandler(uow, notifier).handle(request_id)

        assert _status(uow, request_id) == RequestStatus.PENDING_PICKUP
        assert _on_hand(uow) == 11

    def test_notifier_failure_does_not_roll_back(self):
        notifier = FailingNotifier()
        uow, _, request_id = _setup(notifier)

        AcceptRequestHandler(uow, notifier).handle(request_id, PICKUP)
        CompleteRequestHandler(uow, notifier).handle(request_id)

        assert _status(uow, request_id) == RequestStatus.COMPLETED
        assert _on_hand(uow) == 6
        assert notifier.attempts == 3

    def test_one_event_per_transition(self):
        uow, notifier, request_id = _setup()
        AcceptRequestHandler(uow, notifier).handle(request_id, PICKUP)
        CompleteRequestHandler(uow, notifier).handle(request_id)

        assert notifier.types() == [
            EventType.REQUEST_SUBMITTED,
            EventType.REQUEST_ACCEPTED,
            EventType.REQUEST_COMPLETED,
        ]
