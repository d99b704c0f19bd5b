from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from database.models.base import MAX_INTEGER_ID, ensure_utc
from schemas.common import NamedEntitySchema
from validation.requests import make_partial, validate_http_url

from .examples.movies import (
    movie_create_schema_example,
    movie_update_schema_example,
    movie_schema_example,
    movie_detail_schema_example,
    showtime_create_schema_example,
    showtime_schema_example
)


class MovieCreateSchema(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    ticket_price: float = Field(..., ge=0)
    duration_in_minutes: int = Field(..., ge=0, le=MAX_INTEGER_ID)
    released_date: date
    genre_ids: List[int] = Field(..., min_length=1)
    movie_type_id: int
    spoken_language_id: Optional[int] = None
    subtitle_language_id: Optional[int] = None
    country_id: Optional[int] = None
    trailer_url: Optional[str] = None
    poster_url: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": movie_create_schema_example
        }
    )

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("genre_ids")
    @classmethod
    def validate_unique_genres(
        cls, value: Optional[List[int]]
    ) -> Optional[List[int]]:
        if value is not None and len(set(value)) != len(value):
            raise ValueError("genres must not repeat")
        return value

    @field_validator("trailer_url", "poster_url")
    @classmethod
    def validate_url(cls, value: Optional[str]) -> Optional[str]:
        return validate_http_url(value)


class MovieUpdateSchema(make_partial(MovieCreateSchema)):
    model_config = ConfigDict(
        json_schema_extra={
            "example": movie_update_schema_example
        }
    )


class MovieSchema(BaseModel):
    """A stored movie with its references as identifiers.

    Reference properties carry the canonical names (``genres``,
    ``movie_type`` ...) and hold the validated identifiers, genres in
    submission order. Requires ``genre_links`` to be loaded.
    """
    id: int
    title: str
    description: str
    ticket_price: float
    duration_in_minutes: int
    released_date: date
    genres: List[int] = Field(..., validation_alias="genre_ids")
    movie_type: int = Field(..., validation_alias="movie_type_id")
    spoken_language: Optional[int] = Field(
        None, validation_alias="spoken_language_id"
    )
    subtitle_language: Optional[int] = Field(
        None, validation_alias="subtitle_language_id"
    )
    country: Optional[int] = Field(None, validation_alias="country_id")
    trailer_url: Optional[str] = None
    poster_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        json_schema_extra={
            "example": movie_schema_example
        }
    )


class MovieDetailSchema(MovieSchema):
    """A movie with every reference populated in place of its identifier."""
    genres: List[NamedEntitySchema] = Field(..., validation_alias="genres")
    movie_type: NamedEntitySchema = Field(..., validation_alias="movie_type")
    spoken_language: Optional[NamedEntitySchema] = Field(
        None, validation_alias="spoken_language"
    )
    subtitle_language: Optional[NamedEntitySchema] = Field(
        None, validation_alias="subtitle_language"
    )
    country: Optional[NamedEntitySchema] = Field(
        None, validation_alias="country"
    )

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": movie_detail_schema_example
        }
    )


class MovieReferenceSchema(BaseModel):
    id: int
    title: str
    ticket_price: float
    duration_in_minutes: int

    model_config = ConfigDict(from_attributes=True)


class ShowtimeCreateSchema(BaseModel):
    started_at: datetime
    ticket_price: Optional[float] = Field(None, ge=0)
    movie_id: int
    hall_id: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": showtime_create_schema_example
        }
    )

    @field_validator("started_at")
    @classmethod
    def normalize_started_at(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else value


class ShowtimeUpdateSchema(make_partial(ShowtimeCreateSchema)):
    pass


class ShowtimeSchema(BaseModel):
    id: int
    started_at: datetime
    ticket_price: Optional[float] = None
    movie_id: int
    hall_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": showtime_schema_example
        }
    )


class HallReferenceSchema(BaseModel):
    id: int
    name: str
    cinema_id: int

    model_config = ConfigDict(from_attributes=True)


class ShowtimeDetailSchema(ShowtimeSchema):
    movie: MovieReferenceSchema
    hall: HallReferenceSchema
