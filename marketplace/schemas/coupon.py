"""Coupon request and response schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from marketplace.models.coupon import LAYOUT_SLOTS, CouponType, DiscountType
from marketplace.schemas.base import APIModel, WritePayload


class CouponResponse(APIModel):
    id: str
    code: str
    store_name: str
    store_ids: list[str]
    discount: float
    discount_type: str
    description: str
    title: str | None = None
    display_title: str
    is_active: bool
    max_uses: int
    current_uses: int
    expiry_date: datetime | None = None
    logo_url: str | None = None
    url: str | None = None
    coupon_type: str
    is_popular: bool
    layout_position: int | None = None
    is_latest: bool
    latest_layout_position: int | None = None
    category_id: str | None = None
    created_at: Any = None
    updated_at: Any = None


class CouponListEnvelope(APIModel):
    success: bool = True
    coupons: list[CouponResponse]


class CouponEnvelope(APIModel):
    success: bool = True
    coupon: CouponResponse | None = None


class CouponWrite(WritePayload):
    """Coupon fields accepted by the admin write endpoints.

    Field names are model attributes; aliases are the camelCase API keys.
    Text fields write to the spreadsheet columns because the read path
    prefers them over the snake_case ones.
    """

    legacy_code: str | None = Field(default=None, alias="code", max_length=255)
    legacy_type: CouponType | None = Field(default=None, alias="couponType")
    legacy_title: str | None = Field(default=None, alias="title")
    legacy_description: str | None = Field(default=None, alias="description")
    coupon_url: str | None = Field(default=None, alias="url")
    legacy_expiry: datetime | str | None = Field(default=None, alias="expiryDate")
    legacy_store_id: str | None = Field(default=None, alias="storeId", max_length=64)
    store_ids: list[str] | None = None
    legacy_store_name: str | None = Field(default=None, alias="storeName", max_length=255)
    discount: float | None = Field(default=None, ge=0)
    discount_type: DiscountType | None = None
    is_active: bool | None = None
    max_uses: int | None = Field(default=None, ge=0)
    current_uses: int | None = Field(default=None, ge=0)
    category_id: str | None = Field(default=None, max_length=64)
    is_popular: bool | None = None
    layout_position: int | None = Field(default=None, ge=1, le=LAYOUT_SLOTS)
    is_latest: bool | None = None
    latest_layout_position: int | None = Field(default=None, ge=1, le=LAYOUT_SLOTS)
    logo_url: str | None = None

    @field_validator("coupon_url", "legacy_code", mode="after")
    @classmethod
    def strip_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("legacy_expiry", mode="after")
    @classmethod
    def expiry_to_text(cls, value: datetime | str | None) -> str | None:
        if isinstance(value, datetime):
            return value.isoformat()
        if value is None or not value.strip():
            return None
        return value.strip()


class CouponUpdateRequest(APIModel):
    id: str | None = None
    updates: CouponWrite | None = None


class CouponDeleteRequest(APIModel):
    id: str | None = None


class CouponWriteEnvelope(APIModel):
    success: bool = True
    coupon: CouponResponse


class DashboardStatsResponse(APIModel):
    total_coupons: int
    active_coupons: int
    total_uses: int
    average_discount: str


class DashboardEnvelope(APIModel):
    success: bool = True
    stats: DashboardStatsResponse
    coupons: list[CouponResponse]


class LayoutEnvelope(APIModel):
    success: bool = True
    slots: list[CouponResponse | None]
