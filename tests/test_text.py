"""Tests for the text helpers used by the normalizers."""

import pytest

from marketplace.services.text import (
    decode_entities,
    first_present,
    format_number,
    is_blank,
    is_uuid,
    normalize_url,
    strip_tags,
    to_float,
    to_int,
)


class TestIsBlank:
    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_blank(self, value):
        assert is_blank(value) is True

    @pytest.mark.parametrize("value", ["x", 0, False, [], " a "])
    def test_not_blank(self, value):
        assert is_blank(value) is False


class TestFirstPresent:
    def test_skips_missing_and_blank(self):
        row = {"a": None, "b": "  ", "c": "value", "d": "later"}
        assert first_present(row, "a", "b", "c", "d") == "value"

    def test_none_when_nothing_present(self):
        assert first_present({"a": ""}, "a", "missing") is None

    def test_keeps_falsy_non_strings(self):
        assert first_present({"a": 0}, "a") == 0


class TestNormalizeUrl:
    def test_blank(self):
        assert normalize_url("  ") is None
        assert normalize_url(None) is None

    def test_keeps_scheme(self):
        assert normalize_url(" http://shop.example/x ") == "http://shop.example/x"

    def test_adds_https_to_bare_domain(self):
        assert normalize_url("shop.example/deal") == "https://shop.example/deal"

    def test_leaves_text_without_dot(self):
        assert normalize_url("localhost") == "localhost"

    def test_leaves_text_with_spaces(self):
        assert normalize_url("see shop.example") == "see shop.example"


class TestDecodeEntities:
    def test_known_entities(self):
        assert decode_entities("Save &pound;10 &amp; get &quot;free&quot; P&amp;P") == (
            'Save £10 & get "free" P&P'
        )

    def test_amp_decoded_last(self):
        assert decode_entities("&amp;pound;") == "&pound;"

    def test_apostrophes(self):
        assert decode_entities("Macy&#39;s &apos;sale&apos;") == "Macy's 'sale'"

    def test_passthrough(self):
        assert decode_entities("plain") == "plain"
        assert decode_entities(None) is None


class TestMisc:
    def test_strip_tags(self):
        assert strip_tags(" <b>20% off</b> shoes ") == "20% off shoes"
        assert strip_tags(None) == ""

    def test_is_uuid(self):
        assert is_uuid("3F2B8C1E-5D4A-4B6F-9E7C-1A2B3C4D5E6F") is True
        assert is_uuid("42") is False
        assert is_uuid(42) is False

    def test_to_float(self):
        assert to_float("12.5") == 12.5
        assert to_float("abc", default=1.0) == 1.0
        assert to_float(None) == 0.0
        assert to_float(True) == 0.0

    def test_to_int(self):
        assert to_int("7") == 7
        assert to_int("7.9") == 7
        assert to_int("") is None
        assert to_int("inf") is None
        assert to_int(None) is None

    def test_format_number(self):
        assert format_number(20.0) == "20"
        assert format_number(12.5) == "12.5"
