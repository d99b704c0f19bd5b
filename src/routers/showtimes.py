from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.dependencies import require_admin
from database import get_db
from database.models.cinemas import HallModel
from database.models.movies import MovieModel, ShowtimeModel
from pipeline.filters import PathParamRule, PathParamsFilter
from pipeline.listing import ListQuery, execute_list_query, get_list_query
from pipeline.records import apply_changes, commit_or_rollback, get_record_or_404
from pipeline.references import ReferenceRule, validate_references
from pipeline.responses import ResponseEnvelope
from schemas.common import ListPayloadSchema
from schemas.examples.common import error_responses
from schemas.movies import (
    ShowtimeCreateSchema,
    ShowtimeDetailSchema,
    ShowtimeUpdateSchema
)

router = APIRouter()

SHOWTIME_POPULATE = ("movie", "hall")

showtime_path_filter = PathParamsFilter([
    PathParamRule(field="movie_id", param="movie_id", model=MovieModel),
    PathParamRule(field="hall_id", param="hall_id", model=HallModel)
])

SHOWTIME_REFERENCES = (
    ReferenceRule(MovieModel, source_field="movie_id"),
    ReferenceRule(HallModel, source_field="hall_id"),
)


@router.get(
    "/showtimes/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List showtimes",
    description="(PUBLIC) Get all showtimes with their movie and hall.",
    responses=error_responses(404)
)
@router.get(
    "/movies/{movie_id}/showtimes/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List showtimes of a movie",
    responses=error_responses(404),
    tags=["movies"]
)
@router.get(
    "/halls/{hall_id}/showtimes/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List showtimes of a hall",
    responses=error_responses(404),
    tags=["halls"]
)
async def get_showtimes(
    query: ListQuery = Depends(get_list_query),
    filters: dict = Depends(showtime_path_filter),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[ListPayloadSchema]:
    page = await execute_list_query(
        db, ShowtimeModel, query, filters=filters, populate=SHOWTIME_POPULATE
    )
    return ResponseEnvelope.ok(
        page.to_payload(ShowtimeDetailSchema, query.select_fields)
    )


@router.get(
    "/showtimes/{showtime_id}/",
    response_model=ResponseEnvelope[ShowtimeDetailSchema],
    status_code=status.HTTP_200_OK,
    summary="Get a showtime",
    responses=error_responses(404)
)
async def get_showtime(
    showtime_id: int,
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[ShowtimeDetailSchema]:
    showtime = await get_record_or_404(
        db, ShowtimeModel, showtime_id, SHOWTIME_POPULATE
    )
    return ResponseEnvelope.ok(ShowtimeDetailSchema.model_validate(showtime))


@router.post(
    "/showtimes/",
    response_model=ResponseEnvelope[ShowtimeDetailSchema],
    status_code=status.HTTP_201_CREATED,
    summary="Create a showtime",
    description=(
        "(ADMIN) Schedule a movie in a hall. Without a ticket price the "
        "movie's price applies."
    ),
    responses=error_responses(400, 401, 403, 404)
)
async def create_showtime(
    data: ShowtimeCreateSchema,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[ShowtimeDetailSchema]:
    payload = await validate_references(
        db, SHOWTIME_REFERENCES, data.model_dump()
    )
    showtime = ShowtimeModel(**payload)
    db.add(showtime)
    await commit_or_rollback(db)

    showtime = await get_record_or_404(
        db, ShowtimeModel, showtime.id, SHOWTIME_POPULATE
    )
    return ResponseEnvelope.ok(
        ShowtimeDetailSchema.model_validate(showtime),
        message="Showtime is created successfully"
    )


@router.put(
    "/showtimes/{showtime_id}/",
    response_model=ResponseEnvelope[ShowtimeDetailSchema],
    status_code=status.HTTP_200_OK,
    summary="Update a showtime",
    responses=error_responses(400, 401, 403, 404)
)
async def update_showtime(
    showtime_id: int,
    data: ShowtimeUpdateSchema,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[ShowtimeDetailSchema]:
    showtime = await get_record_or_404(db, ShowtimeModel, showtime_id)
    changes = await validate_references(
        db,
        SHOWTIME_REFERENCES,
        data.model_dump(exclude_unset=True, exclude_none=True)
    )
    apply_changes(showtime, changes)
    await commit_or_rollback(db)

    showtime = await get_record_or_404(
        db, ShowtimeModel, showtime_id, SHOWTIME_POPULATE
    )
    return ResponseEnvelope.ok(
        ShowtimeDetailSchema.model_validate(showtime),
        message="Showtime is updated successfully"
    )


@router.delete(
    "/showtimes/{showtime_id}/",
    response_model=ResponseEnvelope[None],
    status_code=status.HTTP_200_OK,
    summary="Delete a showtime",
    description="(ADMIN) Delete a showtime together with its purchases.",
    responses=error_responses(401, 403, 404)
)
async def delete_showtime(
    showtime_id: int,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[None]:
    showtime = await get_record_or_404(db, ShowtimeModel, showtime_id)
    await db.delete(showtime)
    await commit_or_rollback(db)
    return ResponseEnvelope.ok(message="Showtime is deleted successfully")
