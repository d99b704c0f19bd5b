from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from config.dependencies import require_admin
from database import get_db
from database.models.announcements import AnnouncementModel
from database.models.base import utc_now
from exceptions.api import ValidationError
from pipeline.listing import ListQuery, execute_list_query, get_list_query
from pipeline.records import apply_changes, commit_or_rollback, get_record_or_404
from pipeline.responses import ResponseEnvelope
from schemas.announcements import (
    AnnouncementCreateSchema,
    AnnouncementSchema,
    AnnouncementUpdateSchema,
    validate_announcement_window
)
from schemas.common import ListPayloadSchema
from schemas.examples.common import error_responses

router = APIRouter()


async def next_index_position(db: AsyncSession) -> int:
    """Return one past the highest index position, or 0 for the first one."""
    result = await db.execute(select(func.max(AnnouncementModel.index_position)))
    highest = result.scalar_one_or_none()
    return 0 if highest is None else highest + 1


def check_window(
    started_at: Optional[datetime], ended_at: Optional[datetime]
) -> None:
    try:
        validate_announcement_window(started_at, ended_at)
    except ValueError as e:
        raise ValidationError(str(e))


@router.get(
    "/announcements/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List announcements",
    description="(PUBLIC) Get all announcements. Sort by `index_position` for display order.",
    responses=error_responses(500)
)
async def get_announcements(
    query: ListQuery = Depends(get_list_query),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[ListPayloadSchema]:
    page = await execute_list_query(db, AnnouncementModel, query)
    return ResponseEnvelope.ok(
        page.to_payload(AnnouncementSchema, query.select_fields)
    )


@router.get(
    "/announcements/{announcement_id}/",
    response_model=ResponseEnvelope[AnnouncementSchema],
    status_code=status.HTTP_200_OK,
    summary="Get an announcement",
    responses=error_responses(404)
)
async def get_announcement(
    announcement_id: int,
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[AnnouncementSchema]:
    announcement = await get_record_or_404(
        db, AnnouncementModel, announcement_id
    )
    return ResponseEnvelope.ok(AnnouncementSchema.model_validate(announcement))


@router.post(
    "/announcements/",
    response_model=ResponseEnvelope[AnnouncementSchema],
    status_code=status.HTTP_201_CREATED,
    summary="Create an announcement",
    description=(
        "(ADMIN) Create an announcement. It is placed after every existing "
        "announcement and starts now unless `started_at` is given."
    ),
    responses=error_responses(400, 401, 403)
)
async def create_announcement(
    data: AnnouncementCreateSchema,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[AnnouncementSchema]:
    """Create an announcement at the end of the display order.

    Args:
        data (AnnouncementCreateSchema): Title, description and display window.
        authorized: Dependency to check admin rights.
        db (AsyncSession): Database session dependency.

    Returns:
        ResponseEnvelope[AnnouncementSchema]: The created announcement.

    Raises:
        ValidationError: If ``ended_at`` is before ``started_at``.
    """
    payload = data.model_dump(exclude_none=True)
    payload.setdefault("started_at", utc_now())
    check_window(payload["started_at"], payload.get("ended_at"))

    announcement = AnnouncementModel(
        **payload,
        index_position=await next_index_position(db)
    )
    db.add(announcement)
    await commit_or_rollback(db)
    await db.refresh(announcement)
    return ResponseEnvelope.ok(
        AnnouncementSchema.model_validate(announcement),
        message="Announcement is created successfully"
    )


@router.put(
    "/announcements/{announcement_id}/",
    response_model=ResponseEnvelope[AnnouncementSchema],
    status_code=status.HTTP_200_OK,
    summary="Update an announcement",
    responses=error_responses(400, 401, 403, 404)
)
async def update_announcement(
    announcement_id: int,
    data: AnnouncementUpdateSchema,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[AnnouncementSchema]:
    announcement = await get_record_or_404(
        db, AnnouncementModel, announcement_id
    )
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    check_window(
        changes.get("started_at", announcement.started_at),
        changes.get("ended_at", announcement.ended_at)
    )
    apply_changes(announcement, changes)
    await commit_or_rollback(db)
    await db.refresh(announcement)
    return ResponseEnvelope.ok(
        AnnouncementSchema.model_validate(announcement),
        message="Announcement is updated successfully"
    )


@router.delete(
    "/announcements/{announcement_id}/",
    response_model=ResponseEnvelope[None],
    status_code=status.HTTP_200_OK,
    summary="Delete an announcement",
    responses=error_responses(401, 403, 404)
)
async def delete_announcement(
    announcement_id: int,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[None]:
    announcement = await get_record_or_404(
        db, AnnouncementModel, announcement_id
    )
    await db.delete(announcement)
    await commit_or_rollback(db)
    return ResponseEnvelope.ok(message="Announcement is deleted successfully")
