"""Tests for shared model utilities."""

import uuid
from datetime import UTC, datetime

from marketplace.models.coupon import Coupon
from marketplace.models.shared import as_row, generate_id, utc_now
from marketplace.models.store import Store


class TestGenerateId:
    def test_returns_string_uuid4(self):
        result = generate_id()
        assert isinstance(result, str)
        assert uuid.UUID(result).version == 4

    def test_returns_unique_values(self):
        results = {generate_id() for _ in range(10)}
        assert len(results) == 10


class TestUtcNow:
    def test_returns_utc(self):
        result = utc_now()
        assert isinstance(result, datetime)
        assert result.tzinfo == UTC

    def test_returns_current_time(self):
        before = datetime.now(UTC)
        result = utc_now()
        after = datetime.now(UTC)
        assert before <= result <= after


class TestAsRow:
    def test_uses_column_names(self):
        coupon = Coupon(id="c1", legacy_store_id="42", legacy_code="SAVE", deep_link="https://x.example")
        row = as_row(coupon)
        assert row["id"] == "c1"
        assert row["Store  Id"] == "42"
        assert row["Coupon Code"] == "SAVE"
        assert row["Coupon Deep Link"] == "https://x.example"
        assert "legacy_store_id" not in row

    def test_includes_unset_columns(self):
        row = as_row(Store(name="Acme"))
        assert row["Store Name"] == "Acme"
        assert row["Slug"] is None
        assert "Tracking Url" in row
