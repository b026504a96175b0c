"""Region write schemas."""

from pydantic import Field, field_validator

from marketplace.schemas.base import APIModel, WritePayload
from marketplace.schemas.content import RegionResponse


class RegionUpdate(WritePayload):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    network_id: str | None = Field(default=None, min_length=1, max_length=64)
    description: str | None = None
    is_active: bool | None = None

    @field_validator("name", "network_id", "description", mode="after")
    @classmethod
    def strip_text(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None


class RegionCreate(RegionUpdate):
    """A region needs a name and a unique network id."""

    name: str = Field(min_length=1, max_length=255)
    network_id: str = Field(min_length=1, max_length=64)
    is_active: bool = True


class RegionCreateRequest(APIModel):
    region: RegionCreate | None = None


class RegionUpdateRequest(APIModel):
    id: str | None = None
    updates: RegionUpdate | None = None


class RegionWriteEnvelope(APIModel):
    success: bool = True
    region: RegionResponse
