"""Raw row -> API record conversion for coupons and stores.

The ``coupons`` and ``stores`` tables carry two generations of columns:
spreadsheet headers (``"Coupon Deep Link"``, ``"Store Name"``) and the
snake_case columns written by the admin API. Every fallback chain between
them lives here so the rest of the code only sees ``CouponRecord`` and
``StoreRecord``.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from marketplace.models.coupon import CouponType, DiscountType
from marketplace.services.expiry import safe_parse_expiry
from marketplace.services.text import (
    decode_entities,
    first_present,
    format_number,
    is_blank,
    normalize_url,
    strip_tags,
    to_float,
    to_int,
)

# Column priority chains, first non-blank value wins
COUPON_URL_FIELDS = ("Coupon URL", "Coupon Deep Link", "deeplink", "url")
COUPON_CODE_FIELDS = ("Coupon Code", "code")
COUPON_TYPE_FIELDS = ("Coupon Type", "coupon_type")
COUPON_TITLE_FIELDS = ("Coupon Title", "title")
COUPON_DESCRIPTION_FIELDS = ("Coupon Desc", "description")
COUPON_EXPIRY_FIELDS = ("Coupon Expiry", "expiry_date")
STORE_URL_FALLBACK_FIELDS = ("Tracking Url", "Store Display Url", "website_url")
STORE_CATEGORY_FIELDS = ("category_id", "Parent Category Id", "Cate Ids")

DEFAULT_MAX_USES = 1000
DEFAULT_STORE_RATING = 4.5
FALLBACK_TITLE = "Coupon"

# Descriptions that carry no information and must not be shown as a title
PLACEHOLDER_DESCRIPTIONS = {"-", "n/a", "na", "none", "null", "tbd", "coupon", "description"}

_LIST_SEPARATORS = re.compile(r"[|,;]")


@dataclass
class CouponRecord:
    """Normalized coupon as served by the read API."""

    id: str
    code: str
    store_name: str
    store_ids: list[str]
    discount: float
    discount_type: str
    description: str
    title: str | None
    display_title: str
    is_active: bool
    max_uses: int
    current_uses: int
    expiry_date: datetime | None
    logo_url: str | None
    url: str | None
    coupon_type: str
    is_popular: bool
    layout_position: int | None
    is_latest: bool
    latest_layout_position: int | None
    category_id: str | None
    created_at: Any = None
    updated_at: Any = None
    # Unparsed expiry value, kept for the expiry filter
    raw_expiry: Any = field(default=None, repr=False)


@dataclass
class StoreRecord:
    """Normalized store as served by the read API."""

    id: str
    store_id: str
    name: str
    slug: str
    network_id: str
    logo_url: str
    description: str
    website_url: str
    tracking_url: str | None
    tracking_link: str | None
    country_codes: str | None
    main_category_id: str | None
    category_id: str | None
    merchant_id: str
    why_trust_us: str | None
    more_information: str | None
    rating: float
    review_count: int
    seo_title: str | None
    seo_description: str | None
    category_name: str | None = None
    created_at: Any = None
    updated_at: Any = None


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def store_ids_of(row: Mapping[str, Any]) -> list[str]:
    """All store references of a coupon row, legacy id first, deduplicated."""
    refs: list[str] = []
    legacy = row.get("Store  Id")
    if not is_blank(legacy):
        refs.append(_text(legacy))
    array = row.get("store_ids")
    if isinstance(array, list | tuple):
        for ref in array:
            if not is_blank(ref):
                refs.append(_text(ref))
    return list(dict.fromkeys(refs))


def resolve_coupon_url(row: Mapping[str, Any], store: Mapping[str, Any] | None = None) -> str | None:
    url = first_present(row, *COUPON_URL_FIELDS)
    if url is None and store is not None:
        url = first_present(store, *STORE_URL_FALLBACK_FIELDS)
    return normalize_url(url)


def resolve_coupon_type(row: Mapping[str, Any]) -> str:
    raw = _text(first_present(row, *COUPON_TYPE_FIELDS)).lower()
    if raw == CouponType.DEAL.value:
        return CouponType.DEAL.value
    return CouponType.CODE.value


def resolve_discount_type(row: Mapping[str, Any]) -> str:
    raw = _text(first_present(row, "discount_type")).lower()
    if raw == DiscountType.FIXED.value:
        return DiscountType.FIXED.value
    return DiscountType.PERCENTAGE.value


def discount_label(discount: float, discount_type: str) -> str | None:
    """``"20% Off"`` / ``"$5 Off"``, or None when there is no discount."""
    if discount <= 0:
        return None
    amount = format_number(discount)
    if discount_type == DiscountType.FIXED.value:
        return f"${amount} Off"
    return f"{amount}% Off"


def resolve_display_title(
    title: str | None,
    description: str | None,
    discount: float,
    discount_type: str,
    store_name: str,
) -> str:
    """Title shown on coupon cards.

    Explicit title, then a meaningful description, then a discount label,
    then the store name.
    """
    for candidate in (title, description):
        cleaned = strip_tags(candidate)
        if cleaned and cleaned.lower() not in PLACEHOLDER_DESCRIPTIONS:
            return cleaned
    label = discount_label(discount, discount_type)
    if label:
        return label
    if store_name:
        return store_name
    return FALLBACK_TITLE


def convert_coupon_row(row: Mapping[str, Any], store: Mapping[str, Any] | None = None) -> CouponRecord:
    """Map one raw coupon row to a ``CouponRecord``.

    ``store`` is the raw row of the coupon's resolved store, if any. It
    supplies the store name and the last-resort destination URL; the
    ``"Store Name"`` column on the coupon row is never used.
    """
    coupon_type = resolve_coupon_type(row)
    code = _text(first_present(row, *COUPON_CODE_FIELDS))
    if coupon_type == CouponType.DEAL.value:
        code = ""

    title = decode_entities(_text(first_present(row, *COUPON_TITLE_FIELDS))) or None
    description = decode_entities(_text(first_present(row, *COUPON_DESCRIPTION_FIELDS))) or ""
    discount = to_float(row.get("discount"))
    discount_type = resolve_discount_type(row)
    store_name = ""
    if store is not None:
        store_name = decode_entities(_text(store.get("Store Name"))) or ""

    max_uses = to_int(row.get("max_uses"))
    current_uses = to_int(row.get("current_uses"))
    layout_position = to_int(row.get("Coupon Priority"))
    if layout_position is None:
        layout_position = to_int(row.get("layout_position"))

    raw_expiry = first_present(row, *COUPON_EXPIRY_FIELDS)

    return CouponRecord(
        id=_text(first_present(row, "id", "Coupon Id")),
        code=code,
        store_name=store_name,
        store_ids=store_ids_of(row),
        discount=discount,
        discount_type=discount_type,
        description=description,
        title=title,
        display_title=resolve_display_title(
            title, description, discount, discount_type, store_name
        ),
        is_active=row.get("is_active") is not False,
        max_uses=max(max_uses, 0) if max_uses else DEFAULT_MAX_USES,
        current_uses=max(current_uses or 0, 0),
        expiry_date=safe_parse_expiry(raw_expiry),
        logo_url=first_present(row, "logo_url"),
        url=resolve_coupon_url(row, store),
        coupon_type=coupon_type,
        is_popular=bool(row.get("is_popular")),
        layout_position=layout_position,
        is_latest=bool(row.get("is_latest")),
        latest_layout_position=to_int(row.get("latest_layout_position")),
        category_id=first_present(row, "category_id"),
        created_at=first_present(row, "created_at", "Created Date"),
        updated_at=first_present(row, "updated_at", "Modify Date"),
        raw_expiry=raw_expiry,
    )


def extract_domain(url: str | None) -> str | None:
    """``https://www.shop.co.uk/sale`` -> ``shop.co.uk``."""
    if is_blank(url):
        return None
    clean = re.sub(r"^https?://", "", str(url).strip(), flags=re.IGNORECASE)
    clean = re.sub(r"^www\.", "", clean, flags=re.IGNORECASE)
    clean = clean.split("/")[0].split("?")[0].split(":")[0]
    clean = clean.rstrip(".")
    return clean.lower() or None


def normalize_category_id(row: Mapping[str, Any]) -> str | None:
    """First category id from the structured or legacy category columns."""
    raw = first_present(row, *STORE_CATEGORY_FIELDS)
    if raw is None:
        return None
    if isinstance(raw, list | tuple):
        first = next((item for item in raw if not is_blank(item)), None)
        return _text(first) or None
    first_token = _LIST_SEPARATORS.split(_text(raw))[0].strip()
    return first_token or None


def convert_store_row(row: Mapping[str, Any]) -> StoreRecord:
    """Map one raw store row to a ``StoreRecord``."""
    legacy_id = _text(row.get("Store Id"))
    tracking_url = _text(first_present(row, "Tracking Url"))
    tracking_link = _text(first_present(row, "Tracking Link"))
    website_url = _text(first_present(row, "Store Display Url", "website_url"))

    country_codes = row.get("country_codes")
    if isinstance(country_codes, list | tuple):
        country_codes = ",".join(_text(code) for code in country_codes if not is_blank(code))
    country_codes = _text(country_codes) or None

    category_id = normalize_category_id(row)
    rating = to_float(row.get("rating"), default=0.0)

    return StoreRecord(
        id=_text(row.get("id")) or legacy_id,
        store_id=legacy_id,
        name=decode_entities(_text(row.get("Store Name"))) or "",
        slug=_text(row.get("Slug")),
        network_id=_text(row.get("Network ID")),
        logo_url=_text(first_present(row, "Store Logo", "logo_url")),
        description=decode_entities(
            _text(first_present(row, "description", "Store Description"))
        )
        or "",
        website_url=website_url,
        tracking_url=tracking_url or None,
        tracking_link=tracking_link or None,
        country_codes=country_codes,
        main_category_id=category_id,
        category_id=category_id,
        merchant_id=_text(row.get("Merchant Id")),
        why_trust_us=row.get("why_trust_us"),
        more_information=row.get("more_information"),
        rating=rating if rating > 0 else DEFAULT_STORE_RATING,
        review_count=to_int(row.get("review_count")) or 0,
        seo_title=row.get("seo_title"),
        seo_description=row.get("seo_description"),
        created_at=first_present(row, "Created Date", "created_at"),
        updated_at=first_present(row, "Modify Date", "updated_at"),
    )
