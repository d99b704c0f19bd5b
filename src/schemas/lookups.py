from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.common import NamedEntitySchema
from validation.requests import make_partial

from .examples.lookups import (
    lookup_create_schema_example,
    lookup_update_schema_example,
    lookup_schema_example
)


class LookupCreateSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": lookup_create_schema_example
        }
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value


class LookupUpdateSchema(make_partial(LookupCreateSchema)):
    model_config = ConfigDict(
        json_schema_extra={
            "example": lookup_update_schema_example
        }
    )


class LookupSchema(NamedEntitySchema):
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": lookup_schema_example
        }
    )
