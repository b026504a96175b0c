"""Base models for camelCase JSON payloads."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Reads snake_case attributes, serializes camelCase keys."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class WritePayload(APIModel):
    """Admin write body: only the camelCase keys are accepted, nothing else."""

    model_config = ConfigDict(populate_by_name=False, extra="forbid")


class SuccessEnvelope(APIModel):
    success: bool = True
