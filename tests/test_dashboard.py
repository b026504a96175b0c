"""Tests for the admin dashboard and home page layout endpoints."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from marketplace.core.database import get_db
from marketplace.main import app
from marketplace.services.dashboard import RECENT_COUPONS_LIMIT, DashboardService
from tests.conftest import STORE_LEGACY_ID, create_coupon, create_store

BASE_TIME = datetime(2026, 1, 1, tzinfo=UTC)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db_session():
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


class TestDashboardStats:
    def test_empty(self, client):
        response = client.get("/api/coupons/get-dashboard")
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "stats": {
                "totalCoupons": 0,
                "activeCoupons": 0,
                "totalUses": 0,
                "averageDiscount": "0.00",
            },
            "coupons": [],
        }

    def test_stats(self, client, db_session):
        create_coupon(db_session, legacy_code="A", discount=10, current_uses=3, is_active=True)
        create_coupon(db_session, legacy_code="B", discount=25, current_uses=4, is_active=None)
        create_coupon(db_session, legacy_code="C", discount=0, current_uses=None, is_active=False)
        create_coupon(db_session, legacy_code="D", discount=None, current_uses=1)
        stats = client.get("/api/coupons/get-dashboard").json()["stats"]
        assert stats == {
            "totalCoupons": 4,
            "activeCoupons": 3,
            "totalUses": 8,
            "averageDiscount": "17.50",
        }

    def test_recent_coupons_newest_first_and_limited(self, client, db_session):
        create_store(db_session, store_id=STORE_LEGACY_ID, name="Acme")
        for i in range(RECENT_COUPONS_LIMIT + 2):
            create_coupon(
                db_session,
                legacy_code=f"C{i}",
                legacy_store_id=STORE_LEGACY_ID,
                created_at=BASE_TIME + timedelta(hours=i),
            )
        coupons = client.get("/api/coupons/get-dashboard").json()["coupons"]
        assert len(coupons) == RECENT_COUPONS_LIMIT
        assert coupons[0]["code"] == f"C{RECENT_COUPONS_LIMIT + 1}"
        assert coupons[0]["storeName"] == "Acme"


class TestLayout:
    def test_popular_slots(self, client, db_session):
        create_coupon(db_session, legacy_code="ONE", is_popular=True, layout_position=1)
        create_coupon(db_session, legacy_code="EIGHT", is_popular=True, layout_position=8)
        create_coupon(db_session, legacy_code="UNFLAGGED", is_popular=False, layout_position=2)
        response = client.get("/api/coupons/popular")
        assert response.status_code == 200
        slots = response.json()["slots"]
        assert len(slots) == 8
        assert slots[0]["code"] == "ONE"
        assert slots[7]["code"] == "EIGHT"
        assert slots[1:7] == [None] * 6

    def test_latest_slots(self, client, db_session):
        create_coupon(db_session, legacy_code="L3", is_latest=True, latest_layout_position=3)
        create_coupon(db_session, legacy_code="P3", is_popular=True, layout_position=3)
        slots = client.get("/api/coupons/latest").json()["slots"]
        assert slots[2]["code"] == "L3"
        assert sum(slot is not None for slot in slots) == 1

    def test_newest_wins_a_contested_slot(self, db_session):
        create_coupon(db_session, legacy_code="OLD", is_popular=True, layout_position=4, created_at=BASE_TIME)
        create_coupon(
            db_session,
            legacy_code="NEW",
            is_popular=True,
            layout_position=4,
            created_at=BASE_TIME + timedelta(days=1),
        )
        slots = DashboardService(db_session).get_layout()
        assert slots[3].code == "NEW"

    def test_out_of_range_positions_ignored(self, db_session):
        create_coupon(db_session, legacy_code="X", is_popular=True, layout_position=12)
        assert DashboardService(db_session).get_layout() == [None] * 8
