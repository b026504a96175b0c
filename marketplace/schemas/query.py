"""Filter parameters accepted by the read endpoints."""

from pydantic import BaseModel, field_validator


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class CouponQuery(BaseModel):
    id: str | None = None
    category_id: str | None = None
    store_id: str | None = None
    active_only: bool = False
    bypass_cache: bool = False

    @field_validator("id", "category_id", "store_id")
    @classmethod
    def strip_blank(cls, value: str | None) -> str | None:
        return _blank_to_none(value)

    @classmethod
    def from_params(
        cls,
        id: str | None = None,
        category_id: str | None = None,
        store_id: str | None = None,
        active_only: str | None = None,
        bypass_cache: bool = False,
    ) -> "CouponQuery":
        """Build a query from raw query-string values; only ``"true"`` enables activeOnly."""
        return cls(
            id=id,
            category_id=category_id,
            store_id=store_id,
            active_only=active_only == "true",
            bypass_cache=bypass_cache,
        )

    def cache_key(self) -> str:
        return (
            f"coupons:id={self.id or ''}|categoryId={self.category_id or ''}"
            f"|storeId={self.store_id or ''}|activeOnly={self.active_only}"
        )


class StoreQuery(BaseModel):
    id: str | None = None
    slug: str | None = None
    network_id: str | None = None
    category_id: str | None = None
    country_code: str | None = None
    bypass_cache: bool = False

    @field_validator("id", "slug", "network_id", "category_id", "country_code")
    @classmethod
    def strip_blank(cls, value: str | None) -> str | None:
        return _blank_to_none(value)

    def cache_key(self) -> str:
        return (
            f"stores:id={self.id or ''}|slug={self.slug or ''}"
            f"|networkId={self.network_id or ''}|categoryId={self.category_id or ''}"
            f"|countryCode={(self.country_code or '').upper()}"
        )
