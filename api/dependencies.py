"""
API dependencies for dependency injection
"""

import hmac
from typing import Generator, Optional

from fastapi import Header, Request
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import UnauthorizedError
from domain.catalog import CatalogStore
from domain.models import get_db_session
from services.cart_service import CartSessionStore, cart_sessions


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_catalog_store(request: Request) -> CatalogStore:
    """The catalog store owned by the application (created in main.py)"""
    return request.app.state.catalog_store


def get_cart_store() -> CartSessionStore:
    return cart_sessions


def require_admin(x_admin_key: Optional[str] = Header(default=None)) -> None:
    """Guard stock writes when an admin key is configured"""
    expected = settings.admin_api_key
    if not expected:
        return
    if not x_admin_key or not hmac.compare_digest(x_admin_key, expected):
        raise UnauthorizedError("Invalid or missing admin key")
