from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.accounts import UserReferenceSchema
from schemas.movies import ShowtimeDetailSchema

from .examples.purchases import (
    purchase_create_schema_example,
    purchase_schema_example
)


class PurchaseCreateSchema(BaseModel):
    showtime_id: int
    seats: List[str] = Field(..., min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": purchase_create_schema_example
        }
    )

    @field_validator("seats")
    @classmethod
    def normalize_seats(cls, value: List[str]) -> List[str]:
        seats = [seat.strip() for seat in value]
        if any(not seat for seat in seats):
            raise ValueError("seat labels must not be empty")
        if len(set(seats)) != len(seats):
            raise ValueError("seats must not repeat")
        return seats


class PurchaseSchema(BaseModel):
    id: int
    seats: List[str]
    total_price: float
    user_id: int
    showtime_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": purchase_schema_example
        }
    )


class PurchaseDetailSchema(PurchaseSchema):
    user: UserReferenceSchema
    showtime: ShowtimeDetailSchema
