"""Unit tests for the ExpirationScanner domain service."""

from lojasocial.domain.service.catalog import Catalog
from lojasocial.domain.service.expiration_scanner import ExpirationScanner
from lojasocial.domain.service.stock_ledger import StockLedger
from tests.fakes import NOW, FakeUnitOfWork, add_batch, add_product


def _scanner(uow: FakeUnitOfWork, default_days: int = 3) -> ExpirationScanner:
    return ExpirationScanner(StockLedger(uow), Catalog(uow), default_days=default_days)


class TestScan:

    def test_joins_catalog_entry_and_days_left(self):
        uow = FakeUnitOfWork()
        arroz = add_product(uow, "arroz", "Arroz Agulha")
        item = add_batch(uow, "arroz", 3, expires_in_days=2)

        result = _scanner(uow).scan(now=NOW)

        assert len(result) == 1
        assert result[0].stock_item.id == item.id
        assert result[0].product == arroz
        assert result[0].days_until_expiration == 2

    def test_sorted_by_days_then_product_then_batch(self):
        uow = FakeUnitOfWork()
        add_product(uow, "arroz")
        add_product(uow, "leite")
        b1 = add_batch(uow, "leite", 1, expires_in_days=1)
        b2 = add_batch(uow, "arroz", 1, expires_in_days=1.5)
        b3 = add_batch(uow, "arroz", 1, expires_in_days=0.5)
        b4 = add_batch(uow, "arroz", 1, expires_in_days=2)

        result = _scanner(uow).scan(now=NOW)

        assert [e.stock_item.id for e in result] == [b3.id, b2.id, b1.id, b4.id]
        assert [e.days_until_expiration for e in result] == [0, 1, 1, 2]

    def test_missing_catalog_entry_is_reported_without_product(self):
        uow = FakeUnitOfWork()
        add_batch(uow, "orphan", 2, expires_in_days=1)

        result = _scanner(uow).scan(now=NOW)

        assert result[0].product is None

    def test_default_threshold_is_used(self):
        uow = FakeUnitOfWork()
        add_product(uow, "arroz")
        add_batch(uow, "arroz", 1, expires_in_days=5)

        assert _scanner(uow, default_days=3).scan(now=NOW) == []
        assert len(_scanner(uow, default_days=7).scan(now=NOW)) == 1
        assert len(_scanner(uow).scan(days=5, now=NOW)) == 1
