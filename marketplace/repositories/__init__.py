from marketplace.repositories.category_repository import CategoryRepository
from marketplace.repositories.content_repository import (
    BannerRepository,
    EventRepository,
    NewsRepository,
)
from marketplace.repositories.coupon_repository import CouponRepository
from marketplace.repositories.region_repository import RegionRepository
from marketplace.repositories.store_repository import StoreRepository

__all__ = [
    "BannerRepository",
    "CategoryRepository",
    "CouponRepository",
    "EventRepository",
    "NewsRepository",
    "RegionRepository",
    "StoreRepository",
]
