"""Tests for the request listing and lookup use cases."""

from datetime import timedelta

import pytest

from lojasocial.application.accept_request import AcceptRequestHandler
from lojasocial.application.dto import RequestItemSpec
from lojasocial.application.list_requests import ListRequestsHandler
from lojasocial.application.show_request import ShowRequestHandler
from lojasocial.application.submit_request import SubmitRequestHandler
from lojasocial.domain.exceptions import EntityNotFoundError, ValidationError
from lojasocial.domain.model.request import RequestStatus
from tests.fakes import NOW, FakeUnitOfWork, RecordingNotifier, add_batch, add_product


def _setup():
    uow = FakeUnitOfWork()
    notifier = RecordingNotifier()
    add_product(uow, "arroz")
    add_batch(uow, "arroz", 10)
    submit = SubmitRequestHandler(uow, notifier)
    ids = [
        submit.handle(user, [RequestItemSpec("arroz", 1)]).id
        for user in ("ana", "bruno", "ana")
    ]
    # Spread submission dates so "newest first" is deterministic
    for offset, request_id in enumerate(ids):
        request = uow.requests.get_by_id(request_id)
        request.submission_date = NOW + timedelta(hours=offset)
        uow.requests.save(request)
    return uow, notifier, ids


class TestListRequests:

    def test_newest_first(self):
        uow, _, ids = _setup()
        assert [r.id for r in ListRequestsHandler(uow).handle()] == list(reversed(ids))

    def test_filter_by_user(self):
        uow, _, ids = _setup()
        assert [r.id for r in ListRequestsHandler(uow).handle(user_id="ana")] == [ids[2], ids[0]]

    def test_filter_by_status(self):
        uow, notifier, ids = _setup()
        AcceptRequestHandler(uow, notifier).handle(ids[1], NOW + timedelta(days=1))

        handler = ListRequestsHandler(uow)

        assert [r.id for r in handler.handle(status=RequestStatus.PENDING_PICKUP)] == [ids[1]]
        assert handler.pending_count() == 2


class TestPickupsBetween:

    def test_returns_scheduled_pickups_in_window_soonest_first(self):
        uow, notifier, ids = _setup()
        accept = AcceptRequestHandler(uow, notifier)
        accept.handle(ids[0], NOW + timedelta(days=3))
        accept.handle(ids[1], NOW + timedelta(days=1))
        accept.handle(ids[2], NOW + timedelta(days=10))

        result = ListRequestsHandler(uow).pickups_between(NOW, NOW + timedelta(days=7))

        assert [r.id for r in result] == [ids[1], ids[0]]

    def test_inverted_window_rejected(self):
        uow, _, _ = _setup()
        with pytest.raises(ValidationError):
            ListRequestsHandler(uow).pickups_between(NOW, NOW - timedelta(days=1))


class TestShowRequest:

    def test_show(self):
        uow, _, ids = _setup()
        dto = ShowRequestHandler(uow).handle(ids[1])
        assert dto.user_id == "bruno"
        assert dto.items[0].product_id == "arroz"

    def test_show_missing(self):
        uow, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            ShowRequestHandler(uow).handle("req-404")
