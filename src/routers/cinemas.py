from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.dependencies import require_admin
from database import get_db
from database.models.cinemas import CinemaModel
from pipeline.listing import ListQuery, execute_list_query, get_list_query
from pipeline.records import (
    apply_changes,
    commit_or_rollback,
    ensure_unique,
    get_record_or_404
)
from pipeline.responses import ResponseEnvelope
from schemas.cinemas import CinemaCreateSchema, CinemaSchema, CinemaUpdateSchema
from schemas.common import ListPayloadSchema
from schemas.examples.common import error_responses

router = APIRouter()


@router.get(
    "/cinemas/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List cinemas",
    description="(PUBLIC) Get all cinemas with selecting, sorting and pagination.",
    responses=error_responses(500)
)
async def get_cinemas(
    query: ListQuery = Depends(get_list_query),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[ListPayloadSchema]:
    page = await execute_list_query(db, CinemaModel, query)
    return ResponseEnvelope.ok(page.to_payload(CinemaSchema, query.select_fields))


@router.get(
    "/cinemas/{cinema_id}/",
    response_model=ResponseEnvelope[CinemaSchema],
    status_code=status.HTTP_200_OK,
    summary="Get a cinema",
    description="(PUBLIC) Get a cinema by its ID.",
    responses=error_responses(404)
)
async def get_cinema(
    cinema_id: int,
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[CinemaSchema]:
    cinema = await get_record_or_404(db, CinemaModel, cinema_id)
    return ResponseEnvelope.ok(CinemaSchema.model_validate(cinema))


@router.post(
    "/cinemas/",
    response_model=ResponseEnvelope[CinemaSchema],
    status_code=status.HTTP_201_CREATED,
    summary="Create a cinema",
    description="(ADMIN) Create a cinema. Cinema names are unique.",
    responses=error_responses(400, 401, 403)
)
async def create_cinema(
    data: CinemaCreateSchema,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[CinemaSchema]:
    """Create a new cinema.

    Args:
        data (CinemaCreateSchema): Name, address and optional image.
        authorized: Dependency to check admin rights.
        db (AsyncSession): Database session dependency.

    Returns:
        ResponseEnvelope[CinemaSchema]: The created cinema.

    Raises:
        ValidationError: If a cinema with the same name exists.
    """
    await ensure_unique(db, CinemaModel, "name", data.name)
    cinema = CinemaModel(**data.model_dump(exclude_none=True))
    db.add(cinema)
    await commit_or_rollback(db)
    await db.refresh(cinema)
    return ResponseEnvelope.ok(
        CinemaSchema.model_validate(cinema),
        message="Cinema is created successfully"
    )


@router.put(
    "/cinemas/{cinema_id}/",
    response_model=ResponseEnvelope[CinemaSchema],
    status_code=status.HTTP_200_OK,
    summary="Update a cinema",
    description="(ADMIN) Update the given fields of a cinema.",
    responses=error_responses(400, 401, 403, 404)
)
async def update_cinema(
    cinema_id: int,
    data: CinemaUpdateSchema,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[CinemaSchema]:
    cinema = await get_record_or_404(db, CinemaModel, cinema_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in changes:
        await ensure_unique(
            db, CinemaModel, "name", changes["name"], exclude_id=cinema_id
        )
    apply_changes(cinema, changes)
    await commit_or_rollback(db)
    await db.refresh(cinema)
    return ResponseEnvelope.ok(
        CinemaSchema.model_validate(cinema),
        message="Cinema is updated successfully"
    )


@router.delete(
    "/cinemas/{cinema_id}/",
    response_model=ResponseEnvelope[None],
    status_code=status.HTTP_200_OK,
    summary="Delete a cinema",
    description="(ADMIN) Delete a cinema together with its halls.",
    responses=error_responses(401, 403, 404)
)
async def delete_cinema(
    cinema_id: int,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[None]:
    cinema = await get_record_or_404(db, CinemaModel, cinema_id)
    await db.delete(cinema)
    await commit_or_rollback(db)
    return ResponseEnvelope.ok(message="Cinema is deleted successfully")
