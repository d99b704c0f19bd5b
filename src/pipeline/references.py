import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Type

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models.base import Base, is_storable_id
from exceptions.api import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceRule:
    """Declares an identifier that must exist before a write proceeds.

    Exactly one of ``source_field`` (a request body field) and ``param`` (a path
    parameter) names where the identifier comes from. The validated
    identifier is written to ``assign_to``, which defaults to
    ``source_field``.
    """
    model: Type[Base]
    source_field: Optional[str] = None
    param: Optional[str] = None
    assign_to: Optional[str] = None
    field: str = "id"

    def __post_init__(self) -> None:
        if (self.source_field is None) == (self.param is None):
            raise ValueError(
                "A reference rule needs exactly one of 'source_field' or 'param'."
            )

    @property
    def destination(self) -> Optional[str]:
        if self.param is not None:
            return self.assign_to
        return self.assign_to or self.source_field


def coerce_identifier(value: Any) -> int:
    """Convert a raw identifier (path string or body value) into an int.

    Raises:
        ValidationError: If the value is not an integer identifier.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid identifier: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid identifier: {value!r}")


async def ensure_exists(
    db: AsyncSession, model: Type[Base], value: Any, field: str = "id"
) -> None:
    """Check that a row of ``model`` with ``field == value`` exists.

    Args:
        db (AsyncSession): Database session.
        model (Type[Base]): Model to look the identifier up in.
        value (Any): The identifier.
        field (str): Column holding the identifier.

    Raises:
        NotFoundError: If no such row exists.
    """
    label = getattr(model, "__label__", model.__name__)
    if not is_storable_id(value):
        raise NotFoundError.for_reference(label, value)

    column = getattr(model, field)
    stmt = select(column).where(column == value).limit(1)
    result = await db.execute(stmt)
    if result.first() is None:
        logger.info("%s with %s=%r does not exist", label, field, value)
        raise NotFoundError.for_reference(label, value)


async def validate_references(
    db: AsyncSession,
    rules: Sequence[ReferenceRule],
    data: Mapping[str, Any],
    path_params: Optional[Mapping[str, Any]] = None
) -> dict[str, Any]:
    """Check every referenced identifier and rewrite the body onto its
    canonical keys.

    Rules are processed in order, one lookup per identifier; the first
    missing identifier fails the whole request. Body properties absent from
    ``data`` are skipped so partial updates only check what they change.

    Args:
        db (AsyncSession): Database session.
        rules (Sequence[ReferenceRule]): Rules in evaluation order.
        data (Mapping[str, Any]): Validated request body.
        path_params (Optional[Mapping[str, Any]]): Path parameters of the
            request.

    Returns:
        dict[str, Any]: A copy of ``data`` with validated identifiers moved
            onto their destination properties.

    Raises:
        NotFoundError: If any referenced identifier does not exist.
        ValidationError: If an identifier is not an integer.
    """
    path_params = path_params or {}
    body = dict(data)
    assignments: list[tuple[ReferenceRule, Any]] = []

    for rule in rules:
        if rule.param is not None:
            if rule.param not in path_params:
                continue
            raw_value = path_params[rule.param]
        else:
            raw_value = body.get(rule.source_field)
            if raw_value is None:
                continue

        if isinstance(raw_value, (list, tuple)):
            value = [coerce_identifier(item) for item in raw_value]
            for identifier in value:
                await ensure_exists(db, rule.model, identifier, rule.field)
        else:
            value = coerce_identifier(raw_value)
            await ensure_exists(db, rule.model, value, rule.field)

        assignments.append((rule, value))

    for rule, value in assignments:
        destination = rule.destination
        if destination is None:
            continue
        if rule.source_field is not None and destination != rule.source_field:
            body.pop(rule.source_field, None)
        body[destination] = value

    return body
