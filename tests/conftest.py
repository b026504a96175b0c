"""Shared test fixtures for all test modules."""

import contextlib
from typing import Any

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from marketplace.core import database as db_module
from marketplace.core.cache import coupons_cache, stores_cache
from marketplace.core.database import Base
from marketplace.models.coupon import Coupon
from marketplace.models.store import Store

# Create an in-memory SQLite engine with StaticPool so all connections
# share the same database state and there are no file-locking issues.
_test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)

# Well-known store identifiers used across the API tests
STORE_UUID = "3f2b8c1e-5d4a-4b6f-9e7c-1a2b3c4d5e6f"
STORE_LEGACY_ID = "42"


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and truncate all data after.

    Patches the module-level engine and SessionLocal so all application code
    uses the in-memory test database. Clears data after each test.
    """
    # Patch module-level engine and session factory
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)

    yield
    with _test_engine.connect() as conn:
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            with contextlib.suppress(OperationalError):
                conn.execute(table.delete())
        conn.execute(text("PRAGMA foreign_keys = ON"))
        conn.commit()

    # Restore originals
    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture(autouse=True)
def reset_read_caches():
    """Start every test with empty read caches."""
    coupons_cache.clear()
    stores_cache.clear()
    yield
    coupons_cache.clear()
    stores_cache.clear()


def create_store(db: Session, **columns: Any) -> Store:
    """Insert a store; ``columns`` are model attribute names."""
    store = Store(**{"name": "Acme", **columns})
    db.add(store)
    db.commit()
    db.refresh(store)
    return store


def create_coupon(db: Session, **columns: Any) -> Coupon:
    """Insert a coupon; ``columns`` are model attribute names."""
    coupon = Coupon(**columns)
    db.add(coupon)
    db.commit()
    db.refresh(coupon)
    return coupon
