"""
Tests for the kit-capacity cart engine.

The engine enforces two caps at once:
- per-item stock (never put more of a dish in the cart than is available)
- kit capacity (never more meals than the kit's total_meals)

and reports completion (total reserved == total_meals), the only gate for
checkout. Rejections come back as CartResult outcomes, never exceptions.
"""

import random
from dataclasses import replace

import pytest

from domain.cart import CartEngine, LimitReached
from domain.enums import CartOutcome, CartState
from test_fixtures import make_catalog, make_kit, make_menu_item


def _engine(*items, kit=None):
    catalog = make_catalog(*items)
    return CartEngine(catalog.view(), kit), catalog


# =============================================================================
# SCENARIOS
# =============================================================================


def test_fill_kit_with_one_dish_completes_on_last_add():
    """kit=5, stock=10: five adds succeed, completion and signal on the 5th."""
    item = make_menu_item(stock=10)
    engine, _ = _engine(item, kit=make_kit(5))
    events = []
    engine.subscribe(events.append)

    for n in range(1, 5):
        result = engine.add_one(item)
        assert result.outcome == CartOutcome.ADDED
        assert result.quantity == n
        assert not engine.is_complete()
        assert events == []

    result = engine.add_one(item)
    assert result.outcome == CartOutcome.ADDED
    assert engine.is_complete()
    assert engine.state == CartState.COMPLETE
    assert events == [
        LimitReached(kit_id="kit5", total_meals=5, total_reserved=5, trigger="completed")
    ]


def test_item_stock_limit_rejects_third_unit():
    """kit=5, stock=2: the 3rd add of the same dish is rejected."""
    item = make_menu_item(stock=2)
    engine, _ = _engine(item, kit=make_kit(5))

    engine.add_one(item)
    engine.add_one(item)
    result = engine.add_one(item)

    assert result.outcome == CartOutcome.ITEM_STOCK_LIMIT_REACHED
    assert engine.quantity_of(item.id) == 2
    assert engine.has_reached_stock_limit(item.id)


def test_kit_limit_rejects_other_dish_when_full():
    """kit=1 holding one X: adding Y is refused and the cart is unchanged."""
    x = make_menu_item("1", "Bobó de Frango", stock=10)
    y = make_menu_item("2", "Kibe de Forno", stock=10)
    engine, _ = _engine(x, y, kit=make_kit(1))
    events = []

    engine.add_one(x)
    engine.subscribe(events.append)
    result = engine.add_one(y)

    assert result.outcome == CartOutcome.KIT_LIMIT_REACHED
    assert engine.quantity_of("1") == 1
    assert engine.quantity_of("2") == 0
    assert [e.trigger for e in events] == ["rejected"]


def test_selecting_kit_clears_cart():
    item = make_menu_item(stock=10)
    engine, _ = _engine(item, kit=make_kit(5))
    engine.add_one(item)
    engine.add_one(item)

    engine.select_kit(make_kit(10))

    assert engine.items() == []
    assert engine.total_reserved() == 0
    assert engine.state == CartState.EMPTY
    assert engine.kit.total_meals == 10


# =============================================================================
# GUARDS
# =============================================================================


def test_add_without_kit_is_noop():
    item = make_menu_item()
    engine, _ = _engine(item)
    assert engine.add_one(item).outcome == CartOutcome.NO_KIT
    assert engine.change_quantity(item.id, 1).outcome == CartOutcome.NO_KIT
    assert engine.total_reserved() == 0
    assert not engine.is_complete()


def test_out_of_stock_checked_before_kit_limit():
    sold_out = make_menu_item("2", "Feijuca Fit", stock=0)
    other = make_menu_item("1", stock=5)
    engine, _ = _engine(sold_out, other, kit=make_kit(1))
    engine.add_one(other)

    result = engine.add_one(sold_out)

    assert result.outcome == CartOutcome.OUT_OF_STOCK


def test_limit_event_delivered_after_quantity_applied():
    item = make_menu_item(stock=3)
    engine, _ = _engine(item, kit=make_kit(2))
    seen = []
    engine.subscribe(lambda e: seen.append((engine.quantity_of(item.id), engine.is_complete())))

    engine.add_one(item)
    engine.add_one(item)

    assert seen == [(2, True)]


def test_failing_listener_does_not_undo_mutation():
    item = make_menu_item(stock=3)
    engine, _ = _engine(item, kit=make_kit(1))

    def boom(event):
        raise RuntimeError("modal crashed")

    engine.subscribe(boom)
    result = engine.add_one(item)

    assert result.outcome == CartOutcome.ADDED
    assert engine.is_complete()


# =============================================================================
# CHANGE QUANTITY
# =============================================================================


def test_decrease_to_zero_removes_entry():
    item = make_menu_item(stock=5)
    engine, _ = _engine(item, kit=make_kit(5))
    engine.add_one(item)
    engine.add_one(item)

    assert engine.change_quantity(item.id, -1).outcome == CartOutcome.UPDATED
    result = engine.change_quantity(item.id, -1)

    assert result.outcome == CartOutcome.REMOVED
    assert [line.id for line in engine.items()] == []
    assert engine.state == CartState.EMPTY


def test_large_decrease_floors_at_zero():
    item = make_menu_item(stock=5)
    engine, _ = _engine(item, kit=make_kit(5))
    engine.add_one(item)

    result = engine.change_quantity(item.id, -7)

    assert result.outcome == CartOutcome.REMOVED
    assert engine.quantity_of(item.id) == 0


def test_decrease_absent_item_has_no_effect():
    item = make_menu_item(stock=5)
    engine, _ = _engine(item, kit=make_kit(5))

    result = engine.change_quantity(item.id, -1)

    assert result.outcome == CartOutcome.NOOP
    assert engine.items() == []


def test_increase_respects_both_caps():
    a = make_menu_item("1", stock=2)
    b = make_menu_item("2", "Kibe de Forno", stock=10)
    engine, _ = _engine(a, b, kit=make_kit(3))
    engine.add_one(a)

    assert engine.change_quantity("1", 2).outcome == CartOutcome.ITEM_STOCK_LIMIT_REACHED
    assert engine.change_quantity("1", 1).outcome == CartOutcome.UPDATED
    assert engine.change_quantity("2", 2).outcome == CartOutcome.KIT_LIMIT_REACHED
    assert engine.change_quantity("2", 1).outcome == CartOutcome.ADDED
    assert engine.is_complete()


def test_increase_unknown_item():
    engine, _ = _engine(make_menu_item(), kit=make_kit(5))
    assert engine.change_quantity("404", 1).outcome == CartOutcome.UNKNOWN_ITEM


def test_increase_to_completion_emits_event():
    item = make_menu_item(stock=10)
    engine, _ = _engine(item, kit=make_kit(3))
    events = []
    engine.subscribe(events.append)
    engine.add_one(item)

    engine.change_quantity(item.id, 2)

    assert [e.trigger for e in events] == ["completed"]


def test_completion_toggles_with_quantity():
    item = make_menu_item(stock=10)
    engine, _ = _engine(item, kit=make_kit(2))
    engine.add_one(item)
    engine.add_one(item)
    assert engine.state == CartState.COMPLETE

    engine.change_quantity(item.id, -1)
    assert engine.state == CartState.FILLING
    assert not engine.is_complete()

    engine.change_quantity(item.id, 1)
    assert engine.is_complete()


def test_clear_keeps_kit():
    item = make_menu_item(stock=10)
    kit = make_kit(5)
    engine, _ = _engine(item, kit=kit)
    engine.add_one(item)

    engine.clear()

    assert engine.total_reserved() == 0
    assert engine.kit == kit


# =============================================================================
# LIVE STOCK
# =============================================================================


def test_stock_limit_follows_catalog_refresh():
    item = make_menu_item(stock=3)
    engine, catalog = _engine(item, kit=make_kit(5))
    engine.add_one(item)
    engine.add_one(item)
    assert not engine.has_reached_stock_limit(item.id)

    catalog.apply_stock({item.id: 2})

    assert engine.has_reached_stock_limit(item.id)
    assert engine.add_one(catalog.get(item.id)).outcome == CartOutcome.ITEM_STOCK_LIMIT_REACHED


def test_reconcile_clamps_to_new_stock():
    a = make_menu_item("1", stock=5)
    b = make_menu_item("2", "Kibe de Forno", stock=5)
    engine, catalog = _engine(a, b, kit=make_kit(5))
    for _ in range(3):
        engine.add_one(a)
    engine.add_one(b)

    catalog.apply_stock({"1": 1, "2": 0})
    adjusted = engine.reconcile()

    assert sorted(adjusted) == ["1", "2"]
    assert engine.quantity_of("1") == 1
    assert engine.quantity_of("2") == 0
    assert [line.id for line in engine.items()] == ["1"]


# =============================================================================
# INVARIANTS
# =============================================================================


@pytest.mark.parametrize("seed", [1, 7, 42, 2024])
def test_random_operations_never_break_caps(seed):
    rng = random.Random(seed)
    items = [
        make_menu_item(str(i), f"Prato {i}", stock=rng.randint(0, 6)) for i in range(1, 6)
    ]
    engine, catalog = _engine(*items, kit=make_kit(rng.choice([1, 5, 10])))

    for _ in range(300):
        op = rng.random()
        item_id = rng.choice(items).id
        if op < 0.5:
            engine.add_one(catalog.get(item_id))
        elif op < 0.9:
            engine.change_quantity(item_id, rng.choice([-2, -1, 1, 2, 3]))
        elif op < 0.95:
            engine.clear()
        else:
            engine.select_kit(make_kit(rng.choice([1, 5, 10])))

        assert engine.total_reserved() <= engine.kit.total_meals
        for line in engine.items():
            assert 0 < line.quantity <= catalog.get(line.id).stock
        assert engine.is_complete() == (engine.total_reserved() == engine.kit.total_meals)


def test_items_keep_first_added_order():
    a = make_menu_item("1", stock=5)
    b = make_menu_item("2", "Kibe de Forno", stock=5)
    engine, _ = _engine(a, b, kit=make_kit(5))
    engine.add_one(b)
    engine.add_one(a)
    engine.add_one(b)

    assert [(line.id, line.quantity) for line in engine.items()] == [("2", 2), ("1", 1)]


def test_item_snapshot_reflects_refreshed_stock():
    item = make_menu_item(stock=5)
    engine, catalog = _engine(item, kit=make_kit(5))
    engine.add_one(item)

    catalog.apply_stock({item.id: 4})

    assert engine.items()[0].item == replace(item, stock=4)
