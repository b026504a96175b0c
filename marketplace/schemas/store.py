"""Store request and response schemas."""

from typing import Any

from pydantic import Field, field_validator

from marketplace.schemas.base import APIModel, WritePayload


class StoreResponse(APIModel):
    id: str
    store_id: str
    name: str
    slug: str
    network_id: str
    logo_url: str
    description: str
    website_url: str
    tracking_url: str | None = None
    tracking_link: str | None = None
    country_codes: str | None = None
    main_category_id: str | None = None
    category_id: str | None = None
    category_name: str | None = None
    merchant_id: str
    why_trust_us: str | None = None
    more_information: str | None = None
    rating: float
    review_count: int
    seo_title: str | None = None
    seo_description: str | None = None
    created_at: Any = None
    updated_at: Any = None


class StoreListEnvelope(APIModel):
    success: bool = True
    stores: list[StoreResponse]


class StoreNetworkEnvelope(StoreListEnvelope):
    """Network lookup with exactly one match also carries it as ``store``."""

    store: StoreResponse


class StoreEnvelope(APIModel):
    success: bool = True
    store: StoreResponse | None = None


class StoreUpdate(WritePayload):
    """Store fields accepted by ``/api/stores/update``.

    Field names are model attributes (which map to the native columns);
    aliases are the camelCase API keys.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    store_id: str | None = Field(default=None, alias="storeId", max_length=64)
    network_id: str | None = Field(default=None, alias="networkId", max_length=64)
    merchant_id: str | None = Field(default=None, alias="merchantId", max_length=64)
    logo: str | None = Field(default=None, alias="logoUrl")
    display_url: str | None = Field(default=None, alias="websiteUrl")
    tracking_url: str | None = None
    tracking_link: str | None = None
    description: str | None = None
    category_id: str | None = Field(default=None, max_length=64)
    country_codes: list[str] | str | None = None
    why_trust_us: str | None = None
    more_information: str | None = None
    rating: float | None = Field(default=None, ge=0, le=5)
    review_count: int | None = Field(default=None, ge=0)
    seo_title: str | None = Field(default=None, max_length=255)
    seo_description: str | None = None

    @field_validator("slug", "store_id", mode="after")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("country_codes", mode="after")
    @classmethod
    def split_country_codes(cls, value: list[str] | str | None) -> list[str] | None:
        if value is None:
            return None
        if isinstance(value, str):
            value = value.split(",")
        return [code.strip().upper() for code in value if code.strip()]


class StoreUpdateRequest(APIModel):
    id: str | None = None
    updates: StoreUpdate | None = None


class StoreCreate(StoreUpdate):
    """Store fields accepted by ``/api/stores/create``; a name is required."""

    name: str = Field(min_length=1, max_length=255)


class StoreCreateRequest(APIModel):
    store: StoreCreate | None = None


class StoreCreatedEnvelope(APIModel):
    success: bool = True
    id: str
    store: StoreResponse


class StoreDeleteRequest(APIModel):
    id: str | None = None


class SlugCheckRequest(APIModel):
    slug: str | None = None
    exclude_store_id: str | None = None


class SlugCheckEnvelope(APIModel):
    success: bool = True
    is_unique: bool


class RegionBreakdownResponse(APIModel):
    region: str
    store_count: int
    store_ids: list[str]


class RegionAnalysisEnvelope(APIModel):
    success: bool = True
    total_stores: int
    stores_with_region: int
    stores_without_region: int
    breakdown: list[RegionBreakdownResponse]
    new_regions: list[str]
