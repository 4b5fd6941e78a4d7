"""
Shared fixtures.

Every test gets its own in-memory SQLite database. The API is exercised
through FastAPI's TestClient with get_session overridden to use it.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from storefront.database import get_session
from storefront.main import app
from storefront.models.product import Product

# Register every table on SQLModel.metadata
from storefront.models import cart as _cart_models  # noqa: F401
from storefront.models import order as _order_models  # noqa: F401


@pytest.fixture
def engine():
    """Create in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    """Create database session."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    """TestClient whose requests each get a fresh session on the test DB."""

    def override_get_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def products(session):
    """Seed a small catalog.

    - widget: 100.00, 20% off  -> 80.00
    - gadget: 25.50, no discount
    - gizmo:  9.99, 10% off    -> 8.99
    """
    items = [
        Product(name="Widget", sku="WID-1", price=100.0, discount=0.2),
        Product(name="Gadget", sku="GAD-1", price=25.5),
        Product(name="Gizmo", sku="GIZ-1", price=9.99, discount=0.1),
    ]
    session.add_all(items)
    session.commit()
    for p in items:
        session.refresh(p)
    return {"widget": items[0], "gadget": items[1], "gizmo": items[2]}
