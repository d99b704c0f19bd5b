from datetime import datetime
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator
)

from database.models.base import ensure_utc
from validation.requests import make_partial

from .examples.announcements import (
    announcement_create_schema_example,
    announcement_schema_example
)

ANNOUNCEMENT_WINDOW_MESSAGE = "ended_at must be greater or equal to started_at"


def validate_announcement_window(
    started_at: Optional[datetime], ended_at: Optional[datetime]
) -> None:
    """Raise ValueError when the announcement ends before it starts."""
    if started_at is None or ended_at is None:
        return
    if ensure_utc(ended_at) < ensure_utc(started_at):
        raise ValueError(ANNOUNCEMENT_WINDOW_MESSAGE)


class AnnouncementCreateSchema(BaseModel):
    title: str = Field(..., min_length=1, max_length=250)
    description: str = Field(..., min_length=1)
    image: Optional[str] = None
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": announcement_create_schema_example
        }
    )

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else value

    @field_validator("started_at", "ended_at")
    @classmethod
    def normalize_datetime(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else value

    @model_validator(mode="after")
    def validate_window(self) -> "AnnouncementCreateSchema":
        validate_announcement_window(self.started_at, self.ended_at)
        return self


class AnnouncementUpdateSchema(make_partial(AnnouncementCreateSchema)):
    pass


class AnnouncementSchema(BaseModel):
    id: int
    title: str
    description: str
    image: str
    index_position: int
    started_at: datetime
    ended_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": announcement_schema_example
        }
    )
