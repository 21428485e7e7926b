"""JSON-file-backed implementation of UnitOfWork.

The whole store is one JSON document with a list per collection. A
transaction loads it, the repositories edit the in-memory copy, and a
commit replaces the file in one step (write to a temp file, then
``os.replace``). A rollback simply drops the copy.

The lock inherited from UnitOfWork serialises transactions inside one
process; the file is not meant to be shared by several processes.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from lojasocial.domain.repository.unit_of_work import UnitOfWork
from lojasocial.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from lojasocial.infrastructure.persistence.json_request_repository import (
    JsonRequestRepository,
)
from lojasocial.infrastructure.persistence.json_reservation_repository import (
    JsonReservationRepository,
)
from lojasocial.infrastructure.persistence.json_stock_item_repository import (
    JsonStockItemRepository,
)

logger = logging.getLogger(__name__)

COLLECTIONS = ("products", "stock_items", "reservations", "requests")


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, file_path: Path) -> None:
        super().__init__()
        self._file_path = file_path
        self._document: dict[str, list[dict]] | None = None
        self._ensure_file()

    # --- UnitOfWork hooks -----------------------------------------------------

    def _begin(self) -> None:
        self._document = self._load()
        self.products = JsonProductRepository(self._document["products"])
        self.stock_items = JsonStockItemRepository(self._document["stock_items"])
        self.reservations = JsonReservationRepository(self._document["reservations"])
        self.requests = JsonRequestRepository(self._document["requests"])

    def _commit(self) -> None:
        self._write_atomic(self._document)
        self._document = None

    def _rollback(self) -> None:
        logger.debug("Rolling back transaction on %s", self._file_path)
        self._document = None

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict[str, list[dict]]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {name: raw.get(name, []) for name in COLLECTIONS}

    def _write_atomic(self, document: dict[str, list[dict]]) -> None:
        directory = self._file_path.parent
        fd, tmp = tempfile.mkstemp(prefix=".tmp-", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(json.dumps(document, indent=2) + "\n")
            os.replace(tmp, self._file_path)
        finally:
            if os.path.exists(tmp):
                os.remove(tmp)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._write_atomic({name: [] for name in COLLECTIONS})
