import logging
from typing import Any, Mapping, Optional, Sequence, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models.base import Base, is_storable_id
from exceptions.api import NotFoundError, UnexpectedError, ValidationError
from pipeline.listing import build_loader_options

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


async def get_record_or_404(
    db: AsyncSession,
    model: Type[ModelT],
    record_id: int,
    populate: Sequence[str] = ()
) -> ModelT:
    """Fetch one record by primary key with its populated relationships.

    The query always repopulates the identity map so relationships that were
    replaced during the current session are read back from the store.

    Args:
        db (AsyncSession): Database session.
        model (Type[ModelT]): Model to fetch.
        record_id (int): Primary key of the record.
        populate (Sequence[str]): Relationship paths to eager-load.

    Returns:
        ModelT: The record.

    Raises:
        NotFoundError: If no record has the given primary key.
    """
    if not is_storable_id(record_id):
        raise NotFoundError.for_reference(model.__label__, record_id)

    stmt = (
        select(model)
        .where(model.id == record_id)
        .options(*build_loader_options(model, populate))
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    record = result.scalars().first()
    if record is None:
        raise NotFoundError.for_reference(model.__label__, record_id)
    return record


async def ensure_unique(
    db: AsyncSession,
    model: Type[Base],
    field: str,
    value: Any,
    exclude_id: Optional[int] = None
) -> None:
    """Reject a value already used by another record of ``model``.

    Raises:
        ValidationError: If another record has the same value.
    """
    column = getattr(model, field)
    stmt = select(model.id).where(column == value)
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    result = await db.execute(stmt.limit(1))
    if result.first() is not None:
        raise ValidationError(
            f"{model.__label__} with this {field} already exists."
        )


def apply_changes(record: Base, changes: Mapping[str, Any]) -> None:
    for field, value in changes.items():
        setattr(record, field, value)


async def commit_or_rollback(db: AsyncSession) -> None:
    """Commit the session, rolling back on any store failure.

    Raises:
        ValidationError: If a constraint rejects the write.
        UnexpectedError: If the store fails for any other reason.
    """
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.info("Write rejected by the store: %s", e.orig)
        raise ValidationError("Invalid input data.")
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Commit failed")
        raise UnexpectedError()
