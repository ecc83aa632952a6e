"""Base models and types for the badge engine database."""

from datetime import UTC
from datetime import datetime

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class BaseDBModel(BaseModel):
    """Base model for documents keyed by a string id."""

    id: str

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)


class TimestampMixin(BaseModel):
    """Mixin for timestamp fields."""

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
