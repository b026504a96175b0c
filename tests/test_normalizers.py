"""Tests for raw coupon/store row normalization."""

from datetime import UTC, datetime

import pytest

from marketplace.services.normalizers import (
    DEFAULT_MAX_USES,
    DEFAULT_STORE_RATING,
    convert_coupon_row,
    convert_store_row,
    discount_label,
    extract_domain,
    normalize_category_id,
    resolve_coupon_url,
    resolve_display_title,
    store_ids_of,
)

STORE_ROW = {
    "id": "3f2b8c1e-5d4a-4b6f-9e7c-1a2b3c4d5e6f",
    "Store Id": "42",
    "Store Name": "Acme &amp; Sons",
    "Tracking Url": "https://track.example/acme",
    "Store Display Url": "acme.example",
    "website_url": "https://www.acme.example",
}


class TestStoreIdsOf:
    def test_legacy_id_first_then_array(self):
        row = {"Store  Id": 42, "store_ids": ["uuid-1", "42", " ", None, "uuid-2"]}
        assert store_ids_of(row) == ["42", "uuid-1", "uuid-2"]

    def test_empty(self):
        assert store_ids_of({"Store  Id": "", "store_ids": None}) == []

    def test_non_list_array_is_ignored(self):
        assert store_ids_of({"store_ids": "uuid-1"}) == []


class TestResolveCouponUrl:
    @pytest.mark.parametrize(
        ("row", "expected"),
        [
            (
                {
                    "Coupon URL": "https://a.example",
                    "Coupon Deep Link": "https://b.example",
                    "deeplink": "https://c.example",
                    "url": "https://d.example",
                },
                "https://a.example",
            ),
            (
                {"Coupon URL": " ", "Coupon Deep Link": "https://b.example", "url": "https://d.example"},
                "https://b.example",
            ),
            ({"deeplink": "c.example/deal", "url": "https://d.example"}, "https://c.example/deal"),
            ({"url": "https://d.example"}, "https://d.example"),
        ],
    )
    def test_priority_chain(self, row, expected):
        assert resolve_coupon_url(row) == expected

    def test_falls_back_to_store_tracking_url(self):
        assert resolve_coupon_url({}, STORE_ROW) == "https://track.example/acme"

    def test_falls_back_to_store_display_url(self):
        store = {**STORE_ROW, "Tracking Url": None}
        assert resolve_coupon_url({}, store) == "https://acme.example"

    def test_none_without_any_url(self):
        assert resolve_coupon_url({}, None) is None


class TestDisplayTitle:
    def test_title_wins(self):
        assert resolve_display_title("<b>Big</b> sale", "desc", 10, "percentage", "Acme") == "Big sale"

    def test_meaningful_description(self):
        assert resolve_display_title(None, "Free delivery", 10, "percentage", "Acme") == "Free delivery"

    def test_placeholder_description_skipped(self):
        assert resolve_display_title(None, "N/A", 15, "percentage", "Acme") == "15% Off"

    def test_fixed_discount_label(self):
        assert resolve_display_title(None, None, 5, "fixed", "Acme") == "$5 Off"

    def test_store_name_then_fallback(self):
        assert resolve_display_title(None, "", 0, "percentage", "Acme") == "Acme"
        assert resolve_display_title(None, "", 0, "percentage", "") == "Coupon"

    def test_discount_label_none_for_zero(self):
        assert discount_label(0, "percentage") is None


class TestConvertCouponRow:
    def test_spreadsheet_columns_win(self):
        row = {
            "id": "c1",
            "Coupon Code": "SAVE10",
            "code": "OTHER",
            "Coupon Title": "Ten off",
            "title": "ignored",
            "Coupon Desc": "Fish &amp; chips",
            "description": "ignored",
            "Coupon Type": "Code",
            "discount": "10",
            "Coupon Expiry": "2030-01-01",
            "expiry_date": "2001-01-01",
        }
        record = convert_coupon_row(row)
        assert record.code == "SAVE10"
        assert record.title == "Ten off"
        assert record.description == "Fish & chips"
        assert record.coupon_type == "code"
        assert record.discount == 10.0
        assert record.expiry_date == datetime(2030, 1, 1, tzinfo=UTC)
        assert record.raw_expiry == "2030-01-01"

    def test_snake_case_fallbacks(self):
        record = convert_coupon_row({"id": "c1", "code": "WELCOME", "title": "Welcome"})
        assert record.code == "WELCOME"
        assert record.title == "Welcome"

    def test_deal_clears_code(self):
        record = convert_coupon_row({"id": "c1", "Coupon Code": "SHOULD-GO", "Coupon Type": "deal"})
        assert record.coupon_type == "deal"
        assert record.code == ""

    def test_unknown_type_is_code(self):
        assert convert_coupon_row({"id": "c1", "coupon_type": "voucher"}).coupon_type == "code"

    def test_store_name_comes_only_from_store(self):
        row = {"id": "c1", "Store Name": "Stale Name", "Store  Id": "42"}
        assert convert_coupon_row(row).store_name == ""
        assert convert_coupon_row(row, STORE_ROW).store_name == "Acme & Sons"

    def test_defaults(self):
        record = convert_coupon_row({"Coupon Id": "imported-1"})
        assert record.id == "imported-1"
        assert record.is_active is True
        assert record.max_uses == DEFAULT_MAX_USES
        assert record.current_uses == 0
        assert record.discount_type == "percentage"
        assert record.is_popular is False
        assert record.layout_position is None
        assert record.display_title == "Coupon"

    def test_explicit_inactive(self):
        assert convert_coupon_row({"id": "c1", "is_active": False}).is_active is False

    def test_priority_column_is_layout_position(self):
        record = convert_coupon_row({"id": "c1", "Coupon Priority": "3", "layout_position": 7})
        assert record.layout_position == 3

    def test_malformed_expiry_renders_as_none(self):
        record = convert_coupon_row({"id": "c1", "Coupon Expiry": "soon"})
        assert record.expiry_date is None
        assert record.raw_expiry == "soon"


class TestConvertStoreRow:
    def test_basic_fields(self):
        record = convert_store_row({**STORE_ROW, "Slug": "acme", "Store Logo": "acme.png"})
        assert record.id == STORE_ROW["id"]
        assert record.store_id == "42"
        assert record.name == "Acme & Sons"
        assert record.slug == "acme"
        assert record.logo_url == "acme.png"
        assert record.website_url == "acme.example"
        assert record.tracking_url == "https://track.example/acme"

    def test_id_falls_back_to_legacy_id(self):
        record = convert_store_row({"Store Id": 7, "Store Name": "Seven"})
        assert record.id == "7"

    def test_defaults(self):
        record = convert_store_row({"id": "s1", "Store Name": "Shop", "rating": 0})
        assert record.rating == DEFAULT_STORE_RATING
        assert record.review_count == 0
        assert record.logo_url == ""
        assert record.category_name is None

    def test_country_codes_list_is_joined(self):
        record = convert_store_row({"id": "s1", "Store Name": "Shop", "country_codes": ["US", "GB"]})
        assert record.country_codes == "US,GB"

    @pytest.mark.parametrize(
        ("row", "expected"),
        [
            ({"category_id": "cat-1", "Cate Ids": "cat-9"}, "cat-1"),
            ({"Parent Category Id": "cat-2"}, "cat-2"),
            ({"Cate Ids": "cat-3|cat-4"}, "cat-3"),
            ({"Cate Ids": "cat-5, cat-6"}, "cat-5"),
            ({"category_id": ["", "cat-7"]}, "cat-7"),
            ({}, None),
        ],
    )
    def test_category_id_normalization(self, row, expected):
        assert normalize_category_id(row) == expected


class TestExtractDomain:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://www.shop.co.uk/sale?x=1", "shop.co.uk"),
            ("HTTP://Shop.DE:8080/", "shop.de"),
            ("shop.example", "shop.example"),
            ("", None),
            (None, None),
        ],
    )
    def test_extract(self, url, expected):
        assert extract_domain(url) == expected
