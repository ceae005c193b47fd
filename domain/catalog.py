"""
Catalog value objects and the catalog store.

The store is owned by the application shell. Cart engines and catalog views
only ever receive ``CatalogStore.view()``, a read-only live mapping, so a
stock refresh is visible to them without handing out the mutable store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

logger = logging.getLogger("pratofit.catalog")


@dataclass(frozen=True)
class MenuItem:
    """A purchasable dish. ``stock`` is the sellable unit count."""

    id: str
    title: str
    description: str = ""
    price: Decimal = Decimal("0")
    serving: str = ""
    image_url: str = ""
    category: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)
    stock: int = 0
    original_price: Optional[Decimal] = None

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock <= 0

    @property
    def is_low_stock(self) -> bool:
        return 0 < self.stock <= 5


@dataclass(frozen=True)
class KitDefinition:
    """A plan: how many meals must be chosen and what it costs."""

    id: str
    name: str
    total_meals: int
    price: Decimal
    price_per_meal: Decimal
    description: Optional[str] = None
    highlight: bool = False

    def __post_init__(self):
        if self.total_meals <= 0:
            raise ValueError(f"Kit {self.id} must hold at least one meal")


@dataclass(frozen=True)
class DeliveryZone:
    label: str
    price: Decimal
    neighborhoods: Tuple[str, ...]


class CatalogStore:
    """Menu items with their current stock, plus the kit catalog."""

    def __init__(
        self,
        items: Iterable[MenuItem],
        kits: Iterable[KitDefinition] = (),
    ):
        self._defaults: Dict[str, MenuItem] = {item.id: item for item in items}
        self._items: Dict[str, MenuItem] = dict(self._defaults)
        self._kits: Dict[str, KitDefinition] = {kit.id: kit for kit in kits}

    def view(self) -> Mapping[str, MenuItem]:
        """Read-only mapping of item id to item, reflecting later refreshes."""
        return MappingProxyType(self._items)

    def get(self, item_id: str) -> Optional[MenuItem]:
        return self._items.get(item_id)

    def items(self) -> List[MenuItem]:
        return list(self._items.values())

    def apply_stock(self, stock_map: Mapping[str, int]) -> None:
        """
        Merge server stock over the default menu.

        Items present in ``stock_map`` take the server value; items missing
        from it fall back to their default stock. Ids unknown to the menu are
        ignored.
        """
        for item_id, default in self._defaults.items():
            if item_id in stock_map:
                stock = max(int(stock_map[item_id]), 0)
            else:
                stock = default.stock
            self._items[item_id] = replace(default, stock=stock)

        unknown = set(stock_map) - set(self._defaults)
        if unknown:
            logger.debug("Ignoring stock for ids not on the menu: %s", sorted(unknown))

    def search(self, query: Optional[str] = None) -> List[MenuItem]:
        """Items whose title or any tag contains ``query`` (case-insensitive)."""
        if not query:
            return self.items()
        needle = query.lower()
        return [
            item
            for item in self._items.values()
            if needle in item.title.lower()
            or any(needle in tag.lower() for tag in item.tags)
        ]

    def by_category(self, query: Optional[str] = None) -> Dict[str, List[MenuItem]]:
        groups: Dict[str, List[MenuItem]] = {}
        for item in self.search(query):
            groups.setdefault(item.category, []).append(item)
        return groups

    def kit(self, kit_id: str) -> Optional[KitDefinition]:
        return self._kits.get(kit_id)

    def kits(self) -> List[KitDefinition]:
        return list(self._kits.values())
