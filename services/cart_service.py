from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional
import logging
import uuid

from sqlalchemy.orm import Session

from domain.cart import CartEngine, CartResult, LimitReached
from domain.catalog import CatalogStore, KitDefinition
from services.catalog_service import CatalogService
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("pratofit.cart")


@dataclass
class CartSession:
    """One shopping session: a cart engine plus its undelivered notifications"""

    session_id: uuid.UUID
    engine: CartEngine
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    notifications: List[LimitReached] = field(default_factory=list)

    def take_notifications(self) -> List[LimitReached]:
        # Cleared in place: the engine listener holds this list's append
        pending = list(self.notifications)
        self.notifications.clear()
        return pending


class CartSessionStore:
    """In-memory cart sessions. Sessions are transient and not shared between processes."""

    def __init__(self) -> None:
        self._sessions: Dict[uuid.UUID, CartSession] = {}

    def add(self, session: CartSession) -> CartSession:
        self._sessions[session.session_id] = session
        return session

    def get(self, session_id: uuid.UUID) -> Optional[CartSession]:
        return self._sessions.get(session_id)

    def remove(self, session_id: uuid.UUID) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


cart_sessions = CartSessionStore()


class CartService:
    @staticmethod
    def _resolve_kit(catalog: CatalogStore, kit_id: str) -> KitDefinition:
        kit = catalog.kit(kit_id)
        if kit is None:
            raise ServiceValidationError(f"Unknown kit: {kit_id}")
        return kit

    @staticmethod
    def open_session(
        db: Session,
        store: CartSessionStore,
        catalog: CatalogStore,
        kit_id: Optional[str] = None,
    ) -> CartSession:
        kit = CartService._resolve_kit(catalog, kit_id) if kit_id else None
        CatalogService.refresh(db, catalog)

        engine = CartEngine(catalog.view(), kit)
        session = CartSession(session_id=uuid.uuid4(), engine=engine)
        engine.subscribe(session.notifications.append)
        store.add(session)

        logger.info(
            f"Opened cart session {session.session_id} "
            f"with kit {kit.id if kit else None}"
        )
        return session

    @staticmethod
    def get_session(store: CartSessionStore, session_id: uuid.UUID) -> CartSession:
        """
        Fetch a session, clamping its cart to the catalog's current stock.

        Stock can shrink under an open cart when another order or an admin
        update refreshes the shared catalog.
        """
        session = store.get(session_id)
        if session is None:
            raise NotFoundError(f"Cart session not found: {session_id}")
        session.engine.reconcile()
        return session

    @staticmethod
    def select_kit(
        db: Session,
        store: CartSessionStore,
        catalog: CatalogStore,
        session_id: uuid.UUID,
        kit_id: str,
    ) -> CartSession:
        """Switch the session to another kit; the cart is emptied."""
        session = CartService.get_session(store, session_id)
        kit = CartService._resolve_kit(catalog, kit_id)
        CatalogService.refresh(db, catalog)
        session.engine.select_kit(kit)
        session.notifications.clear()
        logger.info(f"Cart session {session_id} switched to kit {kit.id}")
        return session

    @staticmethod
    def add_item(
        store: CartSessionStore,
        catalog: CatalogStore,
        session_id: uuid.UUID,
        item_id: str,
    ) -> CartResult:
        session = CartService.get_session(store, session_id)
        item = catalog.get(item_id)
        if item is None:
            raise NotFoundError(f"Menu item not found: {item_id}")
        result = session.engine.add_one(item)
        logger.debug(f"Cart {session_id} add {item_id}: {result.outcome.value}")
        return result

    @staticmethod
    def change_quantity(
        store: CartSessionStore, session_id: uuid.UUID, item_id: str, delta: int
    ) -> CartResult:
        session = CartService.get_session(store, session_id)
        result = session.engine.change_quantity(item_id, delta)
        logger.debug(
            f"Cart {session_id} change {item_id} by {delta}: {result.outcome.value}"
        )
        return result

    @staticmethod
    def clear(store: CartSessionStore, session_id: uuid.UUID) -> CartSession:
        session = CartService.get_session(store, session_id)
        session.engine.clear()
        session.notifications.clear()
        return session

    @staticmethod
    def close_session(store: CartSessionStore, session_id: uuid.UUID) -> bool:
        return store.remove(session_id)
