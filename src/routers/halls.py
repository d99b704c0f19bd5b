from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.dependencies import require_admin
from database import get_db
from database.models.cinemas import CinemaModel, HallModel
from database.models.lookups import HallTypeModel
from pipeline.filters import PathParamRule, PathParamsFilter
from pipeline.listing import ListQuery, execute_list_query, get_list_query
from pipeline.records import (
    apply_changes,
    commit_or_rollback,
    ensure_unique,
    get_record_or_404
)
from pipeline.references import ReferenceRule, validate_references
from pipeline.responses import ResponseEnvelope
from schemas.cinemas import HallCreateSchema, HallDetailSchema, HallUpdateSchema
from schemas.common import ListPayloadSchema
from schemas.examples.common import error_responses

router = APIRouter()

HALL_POPULATE = ("cinema", "hall_type")

hall_path_filter = PathParamsFilter([
    PathParamRule(field="cinema_id", param="cinema_id", model=CinemaModel),
    PathParamRule(field="hall_type_id", param="hall_type_id", model=HallTypeModel)
])

HALL_CREATE_REFERENCES = (
    ReferenceRule(CinemaModel, param="cinema_id", assign_to="cinema_id"),
    ReferenceRule(HallTypeModel, source_field="hall_type_id"),
)

HALL_UPDATE_REFERENCES = (
    ReferenceRule(CinemaModel, source_field="cinema_id"),
    ReferenceRule(HallTypeModel, source_field="hall_type_id"),
)


@router.get(
    "/halls/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List halls",
    description="(PUBLIC) Get all halls, optionally scoped to a cinema or a hall type.",
    responses=error_responses(404)
)
@router.get(
    "/cinemas/{cinema_id}/halls/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List halls of a cinema",
    responses=error_responses(404),
    tags=["cinemas"]
)
@router.get(
    "/hall-types/{hall_type_id}/halls/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List halls of a hall type",
    responses=error_responses(404),
    tags=["hall-types"]
)
async def get_halls(
    query: ListQuery = Depends(get_list_query),
    filters: dict = Depends(hall_path_filter),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[ListPayloadSchema]:
    page = await execute_list_query(
        db, HallModel, query, filters=filters, populate=HALL_POPULATE
    )
    return ResponseEnvelope.ok(
        page.to_payload(HallDetailSchema, query.select_fields)
    )


@router.get(
    "/halls/{hall_id}/",
    response_model=ResponseEnvelope[HallDetailSchema],
    status_code=status.HTTP_200_OK,
    summary="Get a hall",
    description="(PUBLIC) Get a hall with its cinema and hall type.",
    responses=error_responses(404)
)
async def get_hall(
    hall_id: int,
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[HallDetailSchema]:
    hall = await get_record_or_404(db, HallModel, hall_id, HALL_POPULATE)
    return ResponseEnvelope.ok(HallDetailSchema.model_validate(hall))


@router.post(
    "/cinemas/{cinema_id}/halls/",
    response_model=ResponseEnvelope[HallDetailSchema],
    status_code=status.HTTP_201_CREATED,
    summary="Create a hall in a cinema",
    description="(ADMIN) Create a hall inside the cinema given in the path.",
    responses=error_responses(400, 401, 403, 404),
    tags=["cinemas"]
)
async def create_hall(
    cinema_id: int,
    data: HallCreateSchema,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[HallDetailSchema]:
    """Create a hall inside a cinema.

    Args:
        cinema_id (int): The cinema the hall belongs to.
        data (HallCreateSchema): Hall name, seat layout and hall type.
        authorized: Dependency to check admin rights.
        db (AsyncSession): Database session dependency.

    Returns:
        ResponseEnvelope[HallDetailSchema]: The created hall, populated.

    Raises:
        NotFoundError: If the cinema or the hall type does not exist.
        ValidationError: If a hall with the same name exists.
    """
    payload = await validate_references(
        db,
        HALL_CREATE_REFERENCES,
        data.model_dump(exclude_none=True),
        path_params={"cinema_id": cinema_id}
    )
    await ensure_unique(db, HallModel, "name", payload["name"])
    hall = HallModel(**payload)
    db.add(hall)
    await commit_or_rollback(db)

    hall = await get_record_or_404(db, HallModel, hall.id, HALL_POPULATE)
    return ResponseEnvelope.ok(
        HallDetailSchema.model_validate(hall),
        message="Hall is created successfully"
    )


@router.put(
    "/halls/{hall_id}/",
    response_model=ResponseEnvelope[HallDetailSchema],
    status_code=status.HTTP_200_OK,
    summary="Update a hall",
    description="(ADMIN) Update the given fields of a hall, including moving it to another cinema.",
    responses=error_responses(400, 401, 403, 404)
)
async def update_hall(
    hall_id: int,
    data: HallUpdateSchema,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[HallDetailSchema]:
    hall = await get_record_or_404(db, HallModel, hall_id)
    changes = await validate_references(
        db,
        HALL_UPDATE_REFERENCES,
        data.model_dump(exclude_unset=True, exclude_none=True)
    )
    if "name" in changes:
        await ensure_unique(
            db, HallModel, "name", changes["name"], exclude_id=hall_id
        )
    apply_changes(hall, changes)
    await commit_or_rollback(db)

    hall = await get_record_or_404(db, HallModel, hall_id, HALL_POPULATE)
    return ResponseEnvelope.ok(
        HallDetailSchema.model_validate(hall),
        message="Hall is updated successfully"
    )


@router.delete(
    "/halls/{hall_id}/",
    response_model=ResponseEnvelope[None],
    status_code=status.HTTP_200_OK,
    summary="Delete a hall",
    description="(ADMIN) Delete a hall together with its showtimes.",
    responses=error_responses(401, 403, 404)
)
async def delete_hall(
    hall_id: int,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[None]:
    hall = await get_record_or_404(db, HallModel, hall_id)
    await db.delete(hall)
    await commit_or_rollback(db)
    return ResponseEnvelope.ok(message="Hall is deleted successfully")
