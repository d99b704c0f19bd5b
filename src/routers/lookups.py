"""CRUD routes shared by the reference data tables.

Genres, movie types, hall types, languages, countries and memberships have
the same shape, so their routes are produced by one builder.
"""
from typing import Type

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.dependencies import require_admin
from database import get_db
from database.models.lookups import (
    LookupMixin,
    GenreModel,
    MovieTypeModel,
    HallTypeModel,
    LanguageModel,
    CountryModel,
    MembershipModel
)
from pipeline.listing import ListQuery, execute_list_query, get_list_query
from pipeline.records import (
    apply_changes,
    commit_or_rollback,
    ensure_unique,
    get_record_or_404
)
from pipeline.responses import ResponseEnvelope
from schemas.common import ListPayloadSchema
from schemas.examples.common import error_responses
from schemas.lookups import LookupCreateSchema, LookupSchema, LookupUpdateSchema


def build_lookup_router(model: Type[LookupMixin], path: str) -> APIRouter:
    """Build list/detail/create/update/delete routes for a lookup model.

    Reads are public, writes require the admin role.

    Args:
        model (Type[LookupMixin]): The lookup model.
        path (str): URL segment of the collection, e.g. ``"genres"``.

    Returns:
        APIRouter: Router with the five routes of the collection.
    """
    label = model.__label__
    plural = path.replace("-", " ")
    lookup_router = APIRouter(tags=[path])

    @lookup_router.get(
        f"/{path}/",
        response_model=ResponseEnvelope[ListPayloadSchema],
        status_code=status.HTTP_200_OK,
        summary=f"List {plural}",
        description=f"(PUBLIC) Get all {plural} with selecting, sorting and pagination.",
        responses=error_responses(500)
    )
    async def list_lookups(
        query: ListQuery = Depends(get_list_query),
        db: AsyncSession = Depends(get_db)
    ) -> ResponseEnvelope[ListPayloadSchema]:
        page = await execute_list_query(db, model, query)
        return ResponseEnvelope.ok(
            page.to_payload(LookupSchema, query.select_fields)
        )

    @lookup_router.get(
        f"/{path}/{{lookup_id}}/",
        response_model=ResponseEnvelope[LookupSchema],
        status_code=status.HTTP_200_OK,
        summary=f"Get a {label.lower()}",
        description=f"(PUBLIC) Get a {label.lower()} by its ID.",
        responses=error_responses(404)
    )
    async def get_lookup(
        lookup_id: int,
        db: AsyncSession = Depends(get_db)
    ) -> ResponseEnvelope[LookupSchema]:
        record = await get_record_or_404(db, model, lookup_id)
        return ResponseEnvelope.ok(LookupSchema.model_validate(record))

    @lookup_router.post(
        f"/{path}/",
        response_model=ResponseEnvelope[LookupSchema],
        status_code=status.HTTP_201_CREATED,
        summary=f"Create a {label.lower()}",
        description=f"(ADMIN) Create a {label.lower()}. Names are unique.",
        responses=error_responses(400, 401, 403)
    )
    async def create_lookup(
        data: LookupCreateSchema,
        authorized=Depends(require_admin),
        db: AsyncSession = Depends(get_db)
    ) -> ResponseEnvelope[LookupSchema]:
        await ensure_unique(db, model, "name", data.name)
        record = model(**data.model_dump())
        db.add(record)
        await commit_or_rollback(db)
        await db.refresh(record)
        return ResponseEnvelope.ok(
            LookupSchema.model_validate(record),
            message=f"{label} is created successfully"
        )

    @lookup_router.put(
        f"/{path}/{{lookup_id}}/",
        response_model=ResponseEnvelope[LookupSchema],
        status_code=status.HTTP_200_OK,
        summary=f"Update a {label.lower()}",
        description=f"(ADMIN) Update the given fields of a {label.lower()}.",
        responses=error_responses(400, 401, 403, 404)
    )
    async def update_lookup(
        lookup_id: int,
        data: LookupUpdateSchema,
        authorized=Depends(require_admin),
        db: AsyncSession = Depends(get_db)
    ) -> ResponseEnvelope[LookupSchema]:
        record = await get_record_or_404(db, model, lookup_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes:
            await ensure_unique(
                db, model, "name", changes["name"], exclude_id=lookup_id
            )
        apply_changes(record, changes)
        await commit_or_rollback(db)
        await db.refresh(record)
        return ResponseEnvelope.ok(
            LookupSchema.model_validate(record),
            message=f"{label} is updated successfully"
        )

    @lookup_router.delete(
        f"/{path}/{{lookup_id}}/",
        response_model=ResponseEnvelope[None],
        status_code=status.HTTP_200_OK,
        summary=f"Delete a {label.lower()}",
        description=f"(ADMIN) Delete a {label.lower()}.",
        responses=error_responses(401, 403, 404)
    )
    async def delete_lookup(
        lookup_id: int,
        authorized=Depends(require_admin),
        db: AsyncSession = Depends(get_db)
    ) -> ResponseEnvelope[None]:
        record = await get_record_or_404(db, model, lookup_id)
        await db.delete(record)
        await commit_or_rollback(db)
        return ResponseEnvelope.ok(message=f"{label} is deleted successfully")

    return lookup_router


router = APIRouter()

router.include_router(build_lookup_router(GenreModel, "genres"))
router.include_router(build_lookup_router(MovieTypeModel, "movie-types"))
router.include_router(build_lookup_router(HallTypeModel, "hall-types"))
router.include_router(build_lookup_router(LanguageModel, "languages"))
router.include_router(build_lookup_router(CountryModel, "countries"))
router.include_router(build_lookup_router(MembershipModel, "memberships"))
