import logging
from typing import Sequence

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config.dependencies import get_current_user, require_admin
from database import get_db
from database.models.accounts import UserModel
from database.models.movies import ShowtimeModel
from database.models.purchases import PurchaseModel
from exceptions.api import AuthorizationError, ValidationError
from pipeline.filters import PathParamRule, PathParamsFilter
from pipeline.listing import ListQuery, execute_list_query, get_list_query
from pipeline.records import commit_or_rollback, get_record_or_404
from pipeline.references import ReferenceRule, validate_references
from pipeline.responses import ResponseEnvelope
from schemas.common import ListPayloadSchema
from schemas.examples.common import error_responses
from schemas.purchases import PurchaseCreateSchema, PurchaseDetailSchema

logger = logging.getLogger(__name__)

router = APIRouter()

PURCHASE_POPULATE = ("user", "showtime.movie", "showtime.hall")

purchase_path_filter = PathParamsFilter([
    PathParamRule(field="showtime_id", param="showtime_id", model=ShowtimeModel)
])

PURCHASE_REFERENCES = (
    ReferenceRule(ShowtimeModel, source_field="showtime_id"),
)


async def get_taken_seats(db: AsyncSession, showtime_id: int) -> set[str]:
    """Collect the seats already sold for a showtime."""
    stmt = select(PurchaseModel.seats).where(
        PurchaseModel.showtime_id == showtime_id
    )
    result = await db.execute(stmt)
    return {seat for seats in result.scalars().all() for seat in seats}


def check_seats(
    seats: Sequence[str], available: set[str], taken: set[str]
) -> None:
    """Validate requested seats against the hall layout and prior sales.

    Raises:
        ValidationError: If a seat is not in the hall or is already sold.
    """
    unknown = [seat for seat in seats if seat not in available]
    if unknown:
        raise ValidationError(
            f"Seats do not exist in the hall: {', '.join(unknown)}"
        )
    sold = [seat for seat in seats if seat in taken]
    if sold:
        raise ValidationError(
            f"Seats are already purchased: {', '.join(sold)}"
        )


@router.get(
    "/purchases/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List purchases",
    description="(ADMIN) Get all purchases with their user and showtime.",
    responses=error_responses(401, 403)
)
@router.get(
    "/showtimes/{showtime_id}/purchases/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List purchases of a showtime",
    responses=error_responses(401, 403, 404),
    tags=["showtimes"]
)
async def get_purchases(
    authorized=Depends(require_admin),
    query: ListQuery = Depends(get_list_query),
    filters: dict = Depends(purchase_path_filter),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[ListPayloadSchema]:
    page = await execute_list_query(
        db, PurchaseModel, query, filters=filters, populate=PURCHASE_POPULATE
    )
    return ResponseEnvelope.ok(
        page.to_payload(PurchaseDetailSchema, query.select_fields)
    )


@router.get(
    "/purchases/{purchase_id}/",
    response_model=ResponseEnvelope[PurchaseDetailSchema],
    status_code=status.HTTP_200_OK,
    summary="Get a purchase",
    description="Get a purchase. Customers can only read their own purchases.",
    responses=error_responses(401, 403, 404)
)
async def get_purchase(
    purchase_id: int,
    user: UserModel = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[PurchaseDetailSchema]:
    purchase = await get_record_or_404(
        db, PurchaseModel, purchase_id, PURCHASE_POPULATE
    )
    if purchase.user_id != user.id and not user.is_admin:
        raise AuthorizationError()
    return ResponseEnvelope.ok(PurchaseDetailSchema.model_validate(purchase))


@router.post(
    "/purchases/",
    response_model=ResponseEnvelope[PurchaseDetailSchema],
    status_code=status.HTTP_201_CREATED,
    summary="Buy tickets",
    description=(
        "Buy seats of a showtime for the authenticated user. The total price "
        "is the number of seats times the showtime's ticket price, or the "
        "movie's price when the showtime has none."
    ),
    responses=error_responses(400, 401, 404)
)
async def create_purchase(
    data: PurchaseCreateSchema,
    user: UserModel = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[PurchaseDetailSchema]:
    """Buy seats of a showtime.

    Args:
        data (PurchaseCreateSchema): Showtime and seat labels.
        user (UserModel): The buyer.
        db (AsyncSession): Database session dependency.

    Returns:
        ResponseEnvelope[PurchaseDetailSchema]: The purchase, populated.

    Raises:
        NotFoundError: If the showtime does not exist.
        ValidationError: If a seat is not in the hall or already sold.
    """
    payload = await validate_references(
        db, PURCHASE_REFERENCES, data.model_dump()
    )
    showtime = await get_record_or_404(
        db, ShowtimeModel, payload["showtime_id"], ("movie", "hall")
    )
    check_seats(
        payload["seats"],
        available=showtime.hall.seat_labels,
        taken=await get_taken_seats(db, showtime.id)
    )

    purchase = PurchaseModel(
        seats=payload["seats"],
        total_price=round(
            len(payload["seats"]) * showtime.effective_ticket_price, 2
        ),
        user_id=user.id,
        showtime_id=showtime.id
    )
    db.add(purchase)
    await commit_or_rollback(db)
    logger.info(
        "User %s bought %d seats of showtime %s",
        user.id,
        len(payload["seats"]),
        showtime.id
    )

    purchase = await get_record_or_404(
        db, PurchaseModel, purchase.id, PURCHASE_POPULATE
    )
    return ResponseEnvelope.ok(
        PurchaseDetailSchema.model_validate(purchase),
        message="Purchase is created successfully"
    )


@router.delete(
    "/purchases/{purchase_id}/",
    response_model=ResponseEnvelope[None],
    status_code=status.HTTP_200_OK,
    summary="Delete a purchase",
    description="(ADMIN) Delete a purchase, releasing its seats.",
    responses=error_responses(401, 403, 404)
)
async def delete_purchase(
    purchase_id: int,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[None]:
    purchase = await get_record_or_404(db, PurchaseModel, purchase_id)
    await db.delete(purchase)
    await commit_or_rollback(db)
    return ResponseEnvelope.ok(message="Purchase is deleted successfully")
