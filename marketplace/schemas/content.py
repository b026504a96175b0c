"""Category, region, banner, event and news schemas."""

from datetime import datetime

from marketplace.schemas.base import APIModel


class CategoryResponse(APIModel):
    id: str
    name: str
    background_color: str
    logo_url: str | None = None
    created_at: datetime | None = None


class RegionResponse(APIModel):
    id: str
    name: str
    network_id: str
    description: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BannerResponse(APIModel):
    id: str
    title: str
    image_url: str
    layout_position: int | None = None
    created_at: datetime | None = None


class EventResponse(APIModel):
    id: str
    title: str
    description: str
    banner_url: str | None = None
    start_date: datetime
    end_date: datetime
    more_details: str | None = None
    created_at: datetime | None = None


class NewsResponse(APIModel):
    id: str
    title: str
    description: str
    content: str | None = None
    image_url: str
    article_url: str | None = None
    date: str | None = None
    layout_position: int | None = None
    created_at: datetime | None = None


class CategoryListEnvelope(APIModel):
    success: bool = True
    categories: list[CategoryResponse]


class CategoryEnvelope(APIModel):
    success: bool = True
    category: CategoryResponse | None = None


class RegionListEnvelope(APIModel):
    success: bool = True
    regions: list[RegionResponse]


class RegionEnvelope(APIModel):
    success: bool = True
    region: RegionResponse | None = None


class BannerListEnvelope(APIModel):
    success: bool = True
    banners: list[BannerResponse]


class BannerEnvelope(APIModel):
    success: bool = True
    banner: BannerResponse | None = None


class EventListEnvelope(APIModel):
    success: bool = True
    events: list[EventResponse]


class EventEnvelope(APIModel):
    success: bool = True
    event: EventResponse | None = None


class NewsListEnvelope(APIModel):
    success: bool = True
    news: list[NewsResponse]


class NewsEnvelope(APIModel):
    success: bool = True
    article: NewsResponse | None = None
