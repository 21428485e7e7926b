"""Abstract Unit of Work: the transaction boundary over all repositories.

A transaction is opened with ``with uow:``. Leaving the block normally
commits every change made through the repositories; leaving it with an
exception discards them. Transactions are serialised by a re-entrant
lock, so two callers can never both act on the same stale snapshot.

Entering the context again on the same thread joins the transaction
that is already open; only the outermost block commits or rolls back.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from lojasocial.domain.repository.product_repository import ProductRepository
from lojasocial.domain.repository.request_repository import RequestRepository
from lojasocial.domain.repository.reservation_repository import ReservationRepository
from lojasocial.domain.repository.stock_item_repository import StockItemRepository


class UnitOfWork(ABC):

    products: ProductRepository
    stock_items: StockItemRepository
    reservations: ReservationRepository
    requests: RequestRepository

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._local = threading.local()

    def __enter__(self) -> UnitOfWork:
        depth = getattr(self._local, "depth", 0)
        if depth == 0:
            self._lock.acquire()
            try:
                self._begin()
            except BaseException:
                self._lock.release()
                raise
        self._local.depth = depth + 1
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._local.depth -= 1
        if self._local.depth > 0:
            return
        try:
            if exc_type is None:
                self._commit()
            else:
                self._rollback()
        finally:
            self._lock.release()

    @property
    def in_transaction(self) -> bool:
        return getattr(self._local, "depth", 0) > 0

    # --- Backend hooks --------------------------------------------------------

    @abstractmethod
    def _begin(self) -> None:
        """Load a working snapshot and bind the repositories to it."""

    @abstractmethod
    def _commit(self) -> None:
        """Make the working snapshot durable in one step."""

    @abstractmethod
    def _rollback(self) -> None:
        """Discard the working snapshot."""
