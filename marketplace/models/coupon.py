"""Coupon model for store discount codes and deals."""

from enum import Enum

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, Numeric, String, Text, func

from marketplace.core.database import Base
from marketplace.models.shared import generate_id

# Layout slots on the home page grids (popular and latest)
LAYOUT_SLOTS = 8


class CouponType(str, Enum):
    CODE = "code"
    DEAL = "deal"


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class Coupon(Base):
    """Coupon row.

    Rows imported from the affiliate spreadsheets fill the capitalized
    columns, rows created through the admin API fill the snake_case ones.
    Both sets are read by the coupon normalizer.
    """

    __tablename__ = "coupons"

    id = Column(String(36), primary_key=True, default=generate_id)
    external_id = Column("Coupon Id", String(64), nullable=True, index=True)

    # Store references: legacy numeric id (note the double space) and id array
    legacy_store_id = Column("Store  Id", String(64), nullable=True, index=True)
    store_ids = Column(JSON, nullable=True)
    legacy_store_name = Column("Store Name", String(255), nullable=True)

    legacy_code = Column("Coupon Code", String(255), nullable=True)
    code = Column(String(255), nullable=True)
    legacy_type = Column("Coupon Type", String(20), nullable=True)
    coupon_type = Column(String(20), nullable=True)

    legacy_title = Column("Coupon Title", Text, nullable=True)
    title = Column(Text, nullable=True)
    legacy_description = Column("Coupon Desc", Text, nullable=True)
    description = Column(Text, nullable=True)

    coupon_url = Column("Coupon URL", Text, nullable=True)
    deep_link = Column("Coupon Deep Link", Text, nullable=True)
    deeplink = Column(Text, nullable=True)
    url = Column(Text, nullable=True)

    discount = Column(Numeric(12, 2), nullable=True)
    discount_type = Column(String(20), nullable=True)
    is_active = Column(Boolean, nullable=True, default=True)
    max_uses = Column(Integer, nullable=True)
    current_uses = Column(Integer, nullable=True)

    legacy_expiry = Column("Coupon Expiry", String(64), nullable=True)
    # ISO strings, epoch numbers or {"seconds", "nanoseconds"} objects
    expiry_date = Column(JSON, nullable=True)

    logo_url = Column(Text, nullable=True)
    is_popular = Column(Boolean, nullable=False, default=False)
    legacy_priority = Column("Coupon Priority", String(16), nullable=True)
    layout_position = Column(Integer, nullable=True)
    is_latest = Column(Boolean, nullable=False, default=False)
    latest_layout_position = Column(Integer, nullable=True)
    category_id = Column(String(64), nullable=True, index=True)

    legacy_created = Column("Created Date", String(64), nullable=True)
    legacy_modified = Column("Modify Date", String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
