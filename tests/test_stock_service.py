"""
Tests for StockService and ProductRepository.

The decrement is all-or-nothing: either every line of a batch is applied or
none is, and a rejected batch reports the first product that fell short.
"""

import pytest

from app.exceptions import InsufficientStockError
from domain.schemas.stock_schemas import DecrementItem, StockItemSet
from repositories import ProductRepository
from services.stock_service import StockService
from test_fixtures import make_menu_item, seed_stock


def _lines(*pairs):
    return [DecrementItem(id=pid, quantity=qty) for pid, qty in pairs]


class TestStockWrites:
    def test_bulk_set_creates_and_updates(self, db_session):
        seed_stock(db_session, **{"1": 5})

        stock_map = StockService.bulk_set(
            db_session,
            [
                StockItemSet(id="1", stock=8, title="Bobó de Frango"),
                StockItemSet(id="2", stock=0),
            ],
        )

        assert stock_map == {"1": 8, "2": 0}
        product = ProductRepository(db_session).get_by_id("1")
        assert product.title == "Bobó de Frango"
        assert product.last_updated is not None

    def test_set_stock_keeps_title_when_omitted(self, db_session):
        StockService.set_stock(db_session, "5", 15, title="Kibe de Forno")

        product = StockService.set_stock(db_session, "5", 9)

        assert product.stock == 9
        assert product.title == "Kibe de Forno"

    def test_get_stock_map_empty(self, db_session):
        assert StockService.get_stock_map(db_session) == {}

    def test_seed_defaults_fills_missing_rows_only(self, db_session):
        seed_stock(db_session, **{"1": 2})
        menu = [
            make_menu_item("1", stock=15),
            make_menu_item("2", "Kibe de Forno", stock=10),
        ]

        created = StockService.seed_defaults(db_session, menu)

        assert created == 1
        assert StockService.get_stock_map(db_session) == {"1": 2, "2": 10}
        assert ProductRepository(db_session).get_by_id("2").title == "Kibe de Forno"
        assert StockService.seed_defaults(db_session, menu) == 0


class TestDecrement:
    def test_decrement_applies_every_line(self, db_session):
        seed_stock(db_session, **{"1": 5, "2": 3})

        remaining = StockService.decrement(db_session, _lines(("1", 2), ("2", 3)))

        assert remaining == {"1": 3, "2": 0}
        assert StockService.get_stock_map(db_session) == {"1": 3, "2": 0}

    def test_failing_line_rolls_back_whole_batch(self, db_session):
        """{A:10, B:3} minus [(A,2), (B,5)] is rejected and leaves both untouched."""
        seed_stock(db_session, A=10, B=3)

        with pytest.raises(InsufficientStockError) as exc_info:
            StockService.decrement(db_session, _lines(("A", 2), ("B", 5)))

        err = exc_info.value
        assert err.product_id == "B"
        assert err.available == 3
        assert err.requested == 5
        assert err.code == "INSUFFICIENT_STOCK"
        assert err.http_status == 409
        assert StockService.get_stock_map(db_session) == {"A": 10, "B": 3}

    def test_unknown_product_has_zero_available(self, db_session):
        seed_stock(db_session, A=10)

        with pytest.raises(InsufficientStockError) as exc_info:
            StockService.decrement(db_session, _lines(("A", 1), ("ghost", 1)))

        assert exc_info.value.product_id == "ghost"
        assert exc_info.value.available == 0
        assert StockService.get_stock_map(db_session) == {"A": 10}

    def test_repeated_id_checked_against_reduced_stock(self, db_session):
        seed_stock(db_session, A=5)

        with pytest.raises(InsufficientStockError) as exc_info:
            StockService.decrement(db_session, _lines(("A", 3), ("A", 3)))

        assert exc_info.value.available == 2
        assert StockService.get_stock_map(db_session) == {"A": 5}

        remaining = StockService.decrement(db_session, _lines(("A", 3), ("A", 2)))
        assert remaining == {"A": 0}

    def test_exact_stock_can_be_taken(self, db_session):
        seed_stock(db_session, A=1)

        StockService.decrement(db_session, _lines(("A", 1)))

        with pytest.raises(InsufficientStockError):
            StockService.decrement(db_session, _lines(("A", 1)))


class TestProductRepository:
    def test_current_stock_defaults_to_zero(self, db_session):
        assert ProductRepository(db_session).current_stock("missing") == 0

    def test_decrement_if_available(self, db_session):
        seed_stock(db_session, A=2)
        repo = ProductRepository(db_session)

        assert repo.decrement_if_available("A", 2) is True
        assert repo.decrement_if_available("A", 1) is False
        db_session.commit()

        assert repo.current_stock("A") == 0

    def test_exists_and_get_all(self, db_session):
        seed_stock(db_session, A=2, B=0)
        repo = ProductRepository(db_session)

        assert repo.exists("A")
        assert not repo.exists("C")
        assert sorted(p.product_id for p in repo.get_all()) == ["A", "B"]
