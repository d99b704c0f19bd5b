from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.dependencies import require_admin
from database import get_db
from database.models.accounts import UserModel
from database.models.lookups import MembershipModel
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
from schemas.accounts import (
    UserCreateRequestSchema,
    UserDetailSchema,
    UserUpdateRequestSchema
)
from schemas.common import ListPayloadSchema
from schemas.examples.common import error_responses

router = APIRouter()

USER_POPULATE = ("membership",)

user_path_filter = PathParamsFilter([
    PathParamRule(field="membership_id", param="membership_id", model=MembershipModel)
])

USER_REFERENCES = (
    ReferenceRule(MembershipModel, source_field="membership_id"),
)


@router.get(
    "/users/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List users",
    description="(ADMIN) Get all users with their membership.",
    responses=error_responses(401, 403)
)
@router.get(
    "/memberships/{membership_id}/users/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List users of a membership",
    responses=error_responses(401, 403, 404),
    tags=["memberships"]
)
async def get_users(
    authorized=Depends(require_admin),
    query: ListQuery = Depends(get_list_query),
    filters: dict = Depends(user_path_filter),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[ListPayloadSchema]:
    page = await execute_list_query(
        db, UserModel, query, filters=filters, populate=USER_POPULATE
    )
    return ResponseEnvelope.ok(
        page.to_payload(UserDetailSchema, query.select_fields)
    )


@router.get(
    "/users/{user_id}/",
    response_model=ResponseEnvelope[UserDetailSchema],
    status_code=status.HTTP_200_OK,
    summary="Get a user",
    responses=error_responses(401, 403, 404)
)
async def get_user(
    user_id: int,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[UserDetailSchema]:
    user = await get_record_or_404(db, UserModel, user_id, USER_POPULATE)
    return ResponseEnvelope.ok(UserDetailSchema.model_validate(user))


@router.post(
    "/users/",
    response_model=ResponseEnvelope[UserDetailSchema],
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    description="(ADMIN) Create a user with any role and an optional membership.",
    responses=error_responses(400, 401, 403, 404)
)
async def create_user(
    data: UserCreateRequestSchema,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[UserDetailSchema]:
    payload = await validate_references(
        db, USER_REFERENCES, data.model_dump(exclude_none=True)
    )
    await ensure_unique(db, UserModel, "name", payload["name"])
    await ensure_unique(db, UserModel, "email", payload["email"])

    user = UserModel.create(
        name=payload["name"],
        email=payload["email"],
        raw_password=payload["password"],
        role=payload["role"],
        membership_id=payload.get("membership_id")
    )
    db.add(user)
    await commit_or_rollback(db)

    user = await get_record_or_404(db, UserModel, user.id, USER_POPULATE)
    return ResponseEnvelope.ok(
        UserDetailSchema.model_validate(user),
        message="User is created successfully"
    )


@router.put(
    "/users/{user_id}/",
    response_model=ResponseEnvelope[UserDetailSchema],
    status_code=status.HTTP_200_OK,
    summary="Update a user",
    description="(ADMIN) Update the given fields of a user. A new password is hashed.",
    responses=error_responses(400, 401, 403, 404)
)
async def update_user(
    user_id: int,
    data: UserUpdateRequestSchema,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[UserDetailSchema]:
    user = await get_record_or_404(db, UserModel, user_id)
    changes = await validate_references(
        db,
        USER_REFERENCES,
        data.model_dump(exclude_unset=True, exclude_none=True)
    )
    for field in ("name", "email"):
        if field in changes:
            await ensure_unique(
                db, UserModel, field, changes[field], exclude_id=user_id
            )
    apply_changes(user, changes)
    await commit_or_rollback(db)

    user = await get_record_or_404(db, UserModel, user_id, USER_POPULATE)
    return ResponseEnvelope.ok(
        UserDetailSchema.model_validate(user),
        message="User is updated successfully"
    )


@router.delete(
    "/users/{user_id}/",
    response_model=ResponseEnvelope[None],
    status_code=status.HTTP_200_OK,
    summary="Delete a user",
    description="(ADMIN) Delete a user together with their purchases.",
    responses=error_responses(401, 403, 404)
)
async def delete_user(
    user_id: int,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[None]:
    user = await get_record_or_404(db, UserModel, user_id)
    await db.delete(user)
    await commit_or_rollback(db)
    return ResponseEnvelope.ok(message="User is deleted successfully")
