from marketplace.schemas.base import APIModel, SuccessEnvelope, WritePayload
from marketplace.schemas.content import (
    BannerEnvelope,
    BannerListEnvelope,
    BannerResponse,
    CategoryEnvelope,
    CategoryListEnvelope,
    CategoryResponse,
    EventEnvelope,
    EventListEnvelope,
    EventResponse,
    NewsEnvelope,
    NewsListEnvelope,
    NewsResponse,
    RegionEnvelope,
    RegionListEnvelope,
    RegionResponse,
)
from marketplace.schemas.coupon import (
    CouponDeleteRequest,
    CouponEnvelope,
    CouponListEnvelope,
    CouponResponse,
    CouponUpdateRequest,
    CouponWrite,
    CouponWriteEnvelope,
    DashboardEnvelope,
    DashboardStatsResponse,
    LayoutEnvelope,
)
from marketplace.schemas.query import CouponQuery, StoreQuery
from marketplace.schemas.region import (
    RegionCreate,
    RegionCreateRequest,
    RegionUpdate,
    RegionUpdateRequest,
    RegionWriteEnvelope,
)
from marketplace.schemas.store import (
    RegionAnalysisEnvelope,
    RegionBreakdownResponse,
    SlugCheckEnvelope,
    SlugCheckRequest,
    StoreCreate,
    StoreCreatedEnvelope,
    StoreCreateRequest,
    StoreDeleteRequest,
    StoreEnvelope,
    StoreListEnvelope,
    StoreNetworkEnvelope,
    StoreResponse,
    StoreUpdate,
    StoreUpdateRequest,
)

__all__ = [
    "APIModel",
    "BannerEnvelope",
    "BannerListEnvelope",
    "BannerResponse",
    "CategoryEnvelope",
    "CategoryListEnvelope",
    "CategoryResponse",
    "CouponDeleteRequest",
    "CouponEnvelope",
    "CouponListEnvelope",
    "CouponQuery",
    "CouponResponse",
    "CouponUpdateRequest",
    "CouponWrite",
    "CouponWriteEnvelope",
    "DashboardEnvelope",
    "DashboardStatsResponse",
    "EventEnvelope",
    "EventListEnvelope",
    "EventResponse",
    "LayoutEnvelope",
    "NewsEnvelope",
    "NewsListEnvelope",
    "NewsResponse",
    "RegionAnalysisEnvelope",
    "RegionBreakdownResponse",
    "RegionCreate",
    "RegionCreateRequest",
    "RegionEnvelope",
    "RegionListEnvelope",
    "RegionResponse",
    "RegionUpdate",
    "RegionUpdateRequest",
    "RegionWriteEnvelope",
    "SlugCheckEnvelope",
    "SlugCheckRequest",
    "StoreCreate",
    "StoreCreateRequest",
    "StoreCreatedEnvelope",
    "StoreDeleteRequest",
    "StoreEnvelope",
    "StoreListEnvelope",
    "StoreNetworkEnvelope",
    "StoreQuery",
    "StoreResponse",
    "StoreUpdate",
    "StoreUpdateRequest",
    "SuccessEnvelope",
    "WritePayload",
]
