"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and points the
application at an in-memory SQLite database before anything imports it.
"""

import os
import sys
from pathlib import Path

import pytest

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ.pop("ADMIN_API_KEY", None)

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from domain.catalog import CatalogStore  # noqa: E402
from domain.constants import MENU_ITEMS, KITS  # noqa: E402
from domain.models import Base, engine, SessionLocal  # noqa: E402
from services.cart_service import cart_sessions  # noqa: E402
from main import app  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_state():
    """Empty schema, no cart sessions and a default catalog for every test"""
    Base.metadata.create_all(bind=engine)
    cart_sessions.clear()
    app.state.catalog_store = CatalogStore(MENU_ITEMS, KITS)
    yield
    cart_sessions.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """
    Database session on the shared in-memory engine.

    Requests made through the TestClient use the same database, so rows
    committed here are visible to the API and vice versa.
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def catalog_store() -> CatalogStore:
    return app.state.catalog_store
