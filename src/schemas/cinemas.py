from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.common import NamedEntitySchema
from validation.requests import make_partial

from .examples.cinemas import (
    cinema_create_schema_example,
    cinema_schema_example,
    hall_create_schema_example,
    hall_update_schema_example,
    hall_schema_example,
    hall_detail_schema_example
)


class CinemaCreateSchema(BaseModel):
    name: str = Field(..., min_length=5, max_length=100)
    address: str = Field(..., min_length=1, max_length=250)
    image: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": cinema_create_schema_example
        }
    )

    @field_validator("name", "address")
    @classmethod
    def strip_text(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else value


class CinemaUpdateSchema(make_partial(CinemaCreateSchema)):
    pass


class CinemaSchema(BaseModel):
    id: int
    name: str
    address: str
    image: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": cinema_schema_example
        }
    )


class CinemaReferenceSchema(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class HallCreateSchema(BaseModel):
    """Hall body of ``POST /cinemas/{cinema_id}/halls/``.

    The cinema comes from the path, so it is not part of the body.
    """
    name: str = Field(..., min_length=5, max_length=100)
    seat_rows: List[Union[str, int]] = Field(..., min_length=1)
    seat_columns: List[Union[str, int]] = Field(..., min_length=1)
    location_image: Optional[str] = None
    hall_type_id: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": hall_create_schema_example
        }
    )

    @field_validator("seat_rows", "seat_columns")
    @classmethod
    def normalize_seat_labels(
        cls, value: Optional[List[Union[str, int]]]
    ) -> Optional[List[str]]:
        if value is None:
            return value
        labels = [str(item).strip() for item in value]
        if any(not label for label in labels):
            raise ValueError("seat labels must not be empty")
        if len(set(labels)) != len(labels):
            raise ValueError("seat labels must be unique")
        return labels


class HallUpdateSchema(make_partial(HallCreateSchema)):
    cinema_id: Optional[int] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": hall_update_schema_example
        }
    )


class HallSchema(BaseModel):
    id: int
    name: str
    seat_rows: List[str]
    seat_columns: List[str]
    location_image: str
    cinema_id: int
    hall_type_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": hall_schema_example
        }
    )


class HallDetailSchema(HallSchema):
    cinema: CinemaReferenceSchema
    hall_type: NamedEntitySchema

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": hall_detail_schema_example
        }
    )
