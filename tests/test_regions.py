"""Tests for region inference, region analysis and the region admin endpoints."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from marketplace.core.database import get_db
from marketplace.main import app
from marketplace.models.region import Region
from marketplace.repositories.region_repository import RegionRepository
from marketplace.services.regions import (
    RegionAnalysisService,
    network_id_for_region,
    region_for_domain,
    region_for_store,
)
from tests.conftest import create_store


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


class TestRegionForDomain:
    @pytest.mark.parametrize(
        ("domain", "expected"),
        [
            ("shop.co.uk", "UK"),
            ("shop.com.au", "Australia"),
            ("shop.au", "Australia"),
            ("shop.de", "Germany"),
            ("shop.com", "USA"),
            ("shop.com.br", "Brazil"),
            ("shop-germany.net", "Germany"),
            ("shop.net", None),
            ("shop.org", None),
            ("", None),
            (None, None),
        ],
    )
    def test_inference(self, domain, expected):
        assert region_for_domain(domain) == expected

    def test_is_case_insensitive(self):
        assert region_for_domain("SHOP.CO.UK") == "UK"

    def test_store_prefers_tracking_url(self):
        row = {"Tracking Url": "https://www.shop.de/x", "Store Display Url": "shop.co.uk"}
        assert region_for_store(row) == "Germany"

    def test_network_id(self):
        assert network_id_for_region("South  Africa") == "south-africa"


class TestRegionAnalysis:
    def test_groups_and_creates_missing_regions(self, db_session):
        RegionRepository(db_session).create(name="UK", network_id="uk")
        create_store(db_session, store_id="1", name="A", display_url="a.co.uk")
        create_store(db_session, store_id="2", name="B", display_url="b.co.uk")
        create_store(db_session, store_id="3", name="C", tracking_url="https://c.de")
        create_store(db_session, store_id="4", name="D", display_url="d.net")

        analysis = RegionAnalysisService(db_session).analyze()

        assert analysis.total_stores == 4
        assert analysis.stores_with_region == 3
        assert analysis.stores_without_region == 1
        assert [(b.region, b.store_count) for b in analysis.breakdown] == [("UK", 2), ("Germany", 1)]
        assert analysis.new_regions == ["Germany"]
        germany = RegionRepository(db_session).get_by_network_id("germany")
        assert germany is not None
        assert germany.is_active is True

    def test_second_run_creates_nothing(self, db_session):
        create_store(db_session, store_id="1", name="A", display_url="a.ca")
        RegionAnalysisService(db_session).analyze()
        assert RegionAnalysisService(db_session).analyze().new_regions == []
        assert db_session.query(Region).count() == 1

    def test_endpoint(self, client, db_session):
        create_store(db_session, store_id="1", name="A", display_url="a.fr")
        response = client.post("/api/stores/analyze-regions")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["totalStores"] == 1
        assert body["storesWithRegion"] == 1
        assert body["storesWithoutRegion"] == 0
        assert body["breakdown"][0]["region"] == "France"
        assert body["breakdown"][0]["storeCount"] == 1
        assert len(body["breakdown"][0]["storeIds"]) == 1
        assert body["newRegions"] == ["France"]


class TestCreateRegion:
    def test_create(self, client, db_session):
        response = client.post(
            "/api/regions/create",
            json={"region": {"name": " Awin UK ", "networkId": " awin-uk ", "description": "UK network"}},
        )
        assert response.status_code == 200
        region = response.json()["region"]
        assert region["name"] == "Awin UK"
        assert region["networkId"] == "awin-uk"
        assert region["isActive"] is True
        assert db_session.query(Region).filter(Region.network_id == "awin-uk").count() == 1

    def test_duplicate_network_id(self, client, db_session):
        RegionRepository(db_session).create(name="UK", network_id="uk")
        response = client.post("/api/regions/create", json={"region": {"name": "Other", "networkId": "uk"}})
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Network ID already exists"}

    def test_missing_region(self, client):
        response = client.post("/api/regions/create", json={})
        assert response.status_code == 400
        assert response.json()["error"] == "Missing region data"

    def test_blank_name_rejected(self, client):
        response = client.post("/api/regions/create", json={"region": {"name": "  ", "networkId": "x"}})
        assert response.status_code == 400
        assert response.json()["error"] == "Region name and network ID are required"

    def test_network_id_is_required(self, client):
        response = client.post("/api/regions/create", json={"region": {"name": "UK"}})
        assert response.status_code == 400
        assert "networkId" in response.json()["error"]

    def test_internal_attribute_names_rejected(self, client):
        response = client.post("/api/regions/create", json={"region": {"name": "UK", "network_id": "uk"}})
        assert response.status_code == 400


class TestUpdateRegion:
    def test_update(self, client, db_session):
        region = RegionRepository(db_session).create(name="UK", network_id="uk")
        response = client.post(
            "/api/regions/update", json={"id": region.id, "updates": {"name": "United Kingdom", "isActive": False}}
        )
        assert response.status_code == 200
        body = response.json()["region"]
        assert body["name"] == "United Kingdom"
        assert body["networkId"] == "uk"
        assert body["isActive"] is False

    def test_same_network_id_is_allowed(self, client, db_session):
        region = RegionRepository(db_session).create(name="UK", network_id="uk")
        response = client.post("/api/regions/update", json={"id": region.id, "updates": {"networkId": "uk"}})
        assert response.status_code == 200

    def test_network_id_taken_by_other_region(self, client, db_session):
        RegionRepository(db_session).create(name="UK", network_id="uk")
        region = RegionRepository(db_session).create(name="US", network_id="us")
        response = client.post("/api/regions/update", json={"id": region.id, "updates": {"networkId": "uk"}})
        assert response.status_code == 400
        assert response.json()["error"] == "Network ID already exists"

    def test_not_found(self, client):
        response = client.post("/api/regions/update", json={"id": "missing", "updates": {"name": "x"}})
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Region not found"}

    def test_missing_updates(self, client):
        response = client.post("/api/regions/update", json={"id": "r1"})
        assert response.status_code == 400
        assert response.json()["error"] == "Missing region ID or updates"

    def test_backend_failure(self, client, db_session, monkeypatch):
        region = RegionRepository(db_session).create(name="UK", network_id="uk")

        def fail(*args, **kwargs):
            raise OperationalError("UPDATE regions", {}, Exception("connection lost"))

        monkeypatch.setattr(RegionRepository, "update", fail)
        response = client.post("/api/regions/update", json={"id": region.id, "updates": {"name": "x"}})
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to save changes"}
