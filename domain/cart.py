"""
Kit-capacity cart engine.

A cart holds quantities of menu items for the selected kit under two caps at
once: the stock of each item and the kit's total number of meals. Every
mutation returns a ``CartResult``; rejections are results, never exceptions.

Listeners subscribed with ``subscribe`` receive ``LimitReached`` events only
after the mutation that produced them has been applied, so a consumer always
observes the updated quantities.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional

from domain.catalog import KitDefinition, MenuItem
from domain.enums import CartOutcome, CartState

logger = logging.getLogger("pratofit.cart")


@dataclass(frozen=True)
class CartItem:
    item: MenuItem
    quantity: int

    @property
    def id(self) -> str:
        return self.item.id


@dataclass(frozen=True)
class CartResult:
    outcome: CartOutcome
    item_id: Optional[str] = None
    quantity: int = 0

    @property
    def ok(self) -> bool:
        return self.outcome in (
            CartOutcome.ADDED,
            CartOutcome.UPDATED,
            CartOutcome.REMOVED,
        )


@dataclass(frozen=True)
class LimitReached:
    """The kit is full.

    ``trigger`` is ``"completed"`` when a mutation filled the kit and
    ``"rejected"`` when an increase was refused because it already was.
    """

    kit_id: str
    total_meals: int
    total_reserved: int
    trigger: str


Listener = Callable[[LimitReached], None]


class CartEngine:
    def __init__(
        self,
        catalog: Mapping[str, MenuItem],
        kit: Optional[KitDefinition] = None,
    ):
        self._catalog = catalog
        self._kit = kit
        # Insertion order is the order items were first added
        self._quantities: Dict[str, int] = {}
        self._listeners: List[Listener] = []
        self._pending: List[LimitReached] = []

    # ------------------ Queries ------------------

    @property
    def kit(self) -> Optional[KitDefinition]:
        return self._kit

    def quantity_of(self, item_id: str) -> int:
        return self._quantities.get(item_id, 0)

    def items(self) -> List[CartItem]:
        lines = []
        for item_id, qty in self._quantities.items():
            item = self._catalog.get(item_id)
            if item is not None:
                lines.append(CartItem(item=item, quantity=qty))
        return lines

    def total_reserved(self) -> int:
        return sum(self._quantities.values())

    def is_complete(self) -> bool:
        return self._kit is not None and self.total_reserved() == self._kit.total_meals

    @property
    def is_limit_reached(self) -> bool:
        return self._kit is not None and self.total_reserved() >= self._kit.total_meals

    def has_reached_stock_limit(self, item_id: str) -> bool:
        item = self._catalog.get(item_id)
        if item is None:
            return True
        return self.quantity_of(item_id) >= item.stock

    @property
    def state(self) -> CartState:
        if not self._quantities:
            return CartState.EMPTY
        if self.is_complete():
            return CartState.COMPLETE
        return CartState.FILLING

    # ------------------ Events ------------------

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _emit(self, trigger: str) -> None:
        self._pending.append(
            LimitReached(
                kit_id=self._kit.id,
                total_meals=self._kit.total_meals,
                total_reserved=self.total_reserved(),
                trigger=trigger,
            )
        )

    def _flush(self) -> None:
        pending, self._pending = self._pending, []
        for event in pending:
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception:
                    logger.exception("Cart listener failed for %s", event)

    # ------------------ Mutations ------------------

    def select_kit(self, kit: KitDefinition) -> None:
        """Switch plans. The cart always starts over."""
        self._kit = kit
        self._quantities.clear()
        logger.debug("Selected kit %s (%d meals)", kit.id, kit.total_meals)

    def clear(self) -> None:
        self._quantities.clear()

    def add_one(self, item: MenuItem) -> CartResult:
        if self._kit is None:
            return CartResult(CartOutcome.NO_KIT, item.id)

        current = self.quantity_of(item.id)
        if item.stock <= 0:
            return CartResult(CartOutcome.OUT_OF_STOCK, item.id, current)

        if self.total_reserved() >= self._kit.total_meals:
            self._emit("rejected")
            self._flush()
            return CartResult(CartOutcome.KIT_LIMIT_REACHED, item.id, current)

        if current >= item.stock:
            return CartResult(CartOutcome.ITEM_STOCK_LIMIT_REACHED, item.id, current)

        self._quantities[item.id] = current + 1
        if self.total_reserved() == self._kit.total_meals:
            self._emit("completed")
        self._flush()
        return CartResult(CartOutcome.ADDED, item.id, current + 1)

    def change_quantity(self, item_id: str, delta: int) -> CartResult:
        if self._kit is None:
            return CartResult(CartOutcome.NO_KIT, item_id)

        current = self.quantity_of(item_id)
        if delta == 0:
            return CartResult(CartOutcome.NOOP, item_id, current)

        if delta < 0:
            if item_id not in self._quantities:
                return CartResult(CartOutcome.NOOP, item_id, 0)
            new_qty = max(0, current + delta)
            if new_qty == 0:
                del self._quantities[item_id]
                return CartResult(CartOutcome.REMOVED, item_id, 0)
            self._quantities[item_id] = new_qty
            return CartResult(CartOutcome.UPDATED, item_id, new_qty)

        item = self._catalog.get(item_id)
        if item is None:
            return CartResult(CartOutcome.UNKNOWN_ITEM, item_id, current)
        if item.stock <= 0:
            return CartResult(CartOutcome.OUT_OF_STOCK, item_id, current)

        if self.total_reserved() + delta > self._kit.total_meals:
            self._emit("rejected")
            self._flush()
            return CartResult(CartOutcome.KIT_LIMIT_REACHED, item_id, current)

        if current + delta > item.stock:
            return CartResult(CartOutcome.ITEM_STOCK_LIMIT_REACHED, item_id, current)

        self._quantities[item_id] = current + delta
        if self.total_reserved() == self._kit.total_meals:
            self._emit("completed")
        self._flush()
        outcome = CartOutcome.UPDATED if current else CartOutcome.ADDED
        return CartResult(outcome, item_id, current + delta)

    def reconcile(self) -> List[str]:
        """
        Clamp quantities to the catalog's current stock.

        Returns the ids whose quantity was reduced or removed. Items that have
        left the catalog are removed as well.
        """
        adjusted = []
        for item_id, qty in list(self._quantities.items()):
            item = self._catalog.get(item_id)
            available = item.stock if item is not None else 0
            if qty <= available:
                continue
            adjusted.append(item_id)
            if available <= 0:
                del self._quantities[item_id]
            else:
                self._quantities[item_id] = available
        if adjusted:
            logger.info("Reconciled cart against stock, adjusted %s", adjusted)
        return adjusted
