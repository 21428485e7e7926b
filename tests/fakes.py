"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON store but keep
everything in dicts. No file I/O, no side effects.

Repositories hand out copies, like the JSON store does, so a caller
mutating an aggregate changes nothing until it saves it.
"""

from __future__ import annotations

import copy
import itertools
from datetime import datetime, timedelta, timezone
from typing import Any

from lojasocial.domain.model.product import Product, ProductCategory
from lojasocial.domain.model.request import Request, RequestStatus
from lojasocial.domain.model.reservation import ReservationPlan
from lojasocial.domain.model.stock_item import StockItem
from lojasocial.domain.repository.product_repository import ProductRepository
from lojasocial.domain.repository.request_repository import RequestRepository
from lojasocial.domain.repository.reservation_repository import ReservationRepository
from lojasocial.domain.repository.stock_item_repository import StockItemRepository
from lojasocial.domain.repository.unit_of_work import UnitOfWork
from lojasocial.domain.service.notifier import EventType, Notifier

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


class FakeProductRepository(ProductRepository):

    def __init__(self) -> None:
        self._store: dict[str, Product] = {}

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        self._store[product.id] = product


class FakeStockItemRepository(StockItemRepository):

    def __init__(self) -> None:
        self._store: dict[str, StockItem] = {}
        self._ids = itertools.count(1)

    def next_id(self) -> str:
        return f"batch-{next(self._ids)}"

    def get_by_id(self, stock_item_id: str) -> StockItem | None:
        return copy.deepcopy(self._store.get(stock_item_id))

    def list_by_product_id(self, product_id: str) -> list[StockItem]:
        return [copy.deepcopy(i) for i in self._store.values() if i.product_id == product_id]

    def list_by_barcode(self, barcode: str) -> list[StockItem]:
        return [copy.deepcopy(i) for i in self._store.values() if i.barcode == barcode]

    def list_all(self) -> list[StockItem]:
        return [copy.deepcopy(i) for i in self._store.values()]

    def save(self, item: StockItem) -> None:
        self._store[item.id] = copy.deepcopy(item)


class FakeReservationRepository(ReservationRepository):

    def __init__(self) -> None:
        self._store: dict[str, ReservationPlan] = {}
        self._ids = itertools.count(1)

    def next_id(self) -> str:
        return f"res-{next(self._ids)}"

    def get_by_id(self, reservation_id: str) -> ReservationPlan | None:
        return copy.deepcopy(self._store.get(reservation_id))

    def save(self, plan: ReservationPlan) -> None:
        self._store[plan.id] = copy.deepcopy(plan)


class FakeRequestRepository(RequestRepository):

    def __init__(self) -> None:
        self._store: dict[str, Request] = {}
        self._ids = itertools.count(1)

    def next_id(self) -> str:
        return f"req-{next(self._ids)}"

    def get_by_id(self, request_id: str) -> Request | None:
        return copy.deepcopy(self._store.get(request_id))

    def list_all(self) -> list[Request]:
        return [copy.deepcopy(r) for r in self._store.values()]

    def save(self, request: Request, expected_status: RequestStatus | None = None) -> None:
        if request.id is None:
            request.id = self.next_id()
        self._check_expected_status(self._store.get(request.id), request, expected_status)
        request.version += 1
        self._store[request.id] = copy.deepcopy(request)


class FakeUnitOfWork(UnitOfWork):
    """Snapshots every store on begin and puts it back on rollback."""

    def __init__(self) -> None:
        super().__init__()
        self.products = FakeProductRepository()
        self.stock_items = FakeStockItemRepository()
        self.reservations = FakeReservationRepository()
        self.requests = FakeRequestRepository()
        self.commits = 0
        self.rollbacks = 0
        self._snapshot: dict[str, dict] | None = None

    def _repos(self) -> dict[str, Any]:
        return {
            "products": self.products,
            "stock_items": self.stock_items,
            "reservations": self.reservations,
            "requests": self.requests,
        }

    def _begin(self) -> None:
        self._snapshot = {
            name: copy.deepcopy(repo._store) for name, repo in self._repos().items()
        }

    def _commit(self) -> None:
        self._snapshot = None
        self.commits += 1

    def _rollback(self) -> None:
        for name, repo in self._repos().items():
            repo._store = self._snapshot[name]
        self._snapshot = None
        self.rollbacks += 1


class RecordingNotifier(Notifier):

    def __init__(self) -> None:
        self.events: list[tuple[EventType, dict[str, Any]]] = []

    def notify(self, event_type: EventType, payload: dict[str, Any]) -> None:
        self.events.append((event_type, payload))

    def types(self) -> list[EventType]:
        return [event_type for event_type, _ in self.events]


class FailingNotifier(Notifier):

    def __init__(self) -> None:
        self.attempts = 0

    def notify(self, event_type: EventType, payload: dict[str, Any]) -> None:
        self.attempts += 1
        raise RuntimeError("push service unavailable")


# --- Builders -----------------------------------------------------------------


def add_product(
    uow: FakeUnitOfWork,
    product_id: str,
    name: str | None = None,
    category: ProductCategory = ProductCategory.ALIMENTAR,
) -> Product:
    product = Product(id=product_id, name=name or product_id.title(), category=category)
    uow.products.save(product)
    return product


def add_batch(
    uow: FakeUnitOfWork,
    product_id: str,
    quantity: int,
    expires_in_days: float | None = None,
    reserved: int = 0,
    barcode: str | None = None,
    created_at: datetime = NOW,
    now: datetime = NOW,
) -> StockItem:
    item = StockItem(
        id=uow.stock_items.next_id(),
        barcode=barcode or f"bc-{product_id}",
        product_id=product_id,
        quantity=quantity,
        reserved_quantity=reserved,
        expiration_date=(
            now + timedelta(days=expires_in_days) if expires_in_days is not None else None
        ),
        created_at=created_at,
    )
    uow.stock_items.save(item)
    return item


def batch(uow: FakeUnitOfWork, stock_item_id: str) -> StockItem:
    return uow.stock_items.get_by_id(stock_item_id)
