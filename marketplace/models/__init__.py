from marketplace.models.category import Category
from marketplace.models.content import Banner, Event, News
from marketplace.models.coupon import LAYOUT_SLOTS, Coupon, CouponType, DiscountType
from marketplace.models.region import Region
from marketplace.models.store import Store

__all__ = [
    "Banner",
    "Category",
    "Coupon",
    "CouponType",
    "DiscountType",
    "Event",
    "LAYOUT_SLOTS",
    "News",
    "Region",
    "Store",
]
