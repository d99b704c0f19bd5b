from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .examples.common import list_payload_schema_example


class PaginationSchema(BaseModel):
    current_page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    prev_page: Optional[int] = None
    next_page: Optional[int] = None


class ListPayloadSchema(BaseModel):
    records: List[Dict[str, Any]]
    total_count: int
    pagination: Optional[PaginationSchema] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": list_payload_schema_example
        }
    )


class NamedEntitySchema(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
