import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Type

from fastapi import Depends, Query
from pydantic import BaseModel
from sqlalchemy import ColumnElement, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from config.settings import BaseAppSettings, get_settings
from database.models.base import MAX_INTEGER_ID, Base
from schemas.common import ListPayloadSchema, PaginationSchema

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
FALSE_LIKE_VALUES = frozenset({"false", "0", "no", "off"})


@dataclass(frozen=True)
class SortField:
    name: str
    descending: bool = False


@dataclass(frozen=True)
class ListQuery:
    """Parsed list query parameters.

    ``select_fields`` and ``sort_fields`` are ``None``/empty when the client
    did not ask for a projection or an ordering.
    """
    select_fields: Optional[tuple[str, ...]] = None
    sort_fields: tuple[SortField, ...] = ()
    page: int = DEFAULT_PAGE
    page_size: int = 20
    paginate: bool = True

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @classmethod
    def parse(
        cls,
        select_fields: Optional[str] = None,
        sort: Optional[str] = None,
        limit: Optional[str] = None,
        page: Optional[str] = None,
        paging: Optional[str] = None,
        default_page_size: int = 20
    ) -> "ListQuery":
        """Build a list query from raw query-string values.

        Invalid or non-positive ``limit`` and ``page`` values fall back to
        their defaults instead of failing the request. Values beyond the
        64-bit integer range are capped.

        Args:
            select_fields (Optional[str]): Comma separated field names.
            sort (Optional[str]): Comma separated field names, ``-`` prefix
                for descending order.
            limit (Optional[str]): Page size.
            page (Optional[str]): One-based page index.
            paging (Optional[str]): False-like value disables pagination.
            default_page_size (int): Page size used when ``limit`` is
                missing or invalid.

        Returns:
            ListQuery: The parsed query.
        """
        selected = _split_fields(select_fields)
        sort_fields = tuple(
            SortField(name=name.lstrip("-"), descending=name.startswith("-"))
            for name in _split_fields(sort) or ()
            if name.lstrip("-")
        )
        return cls(
            select_fields=selected,
            sort_fields=sort_fields,
            page=_positive_int(page, DEFAULT_PAGE),
            page_size=_positive_int(limit, default_page_size),
            paginate=(paging or "").strip().lower() not in FALSE_LIKE_VALUES
        )


@dataclass
class PaginatedResult:
    """A page of records plus the numbers needed to describe the page."""
    records: Sequence[Any]
    total_count: int
    current_page: int
    page_size: int
    paginated: bool = True

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    def to_payload(
        self,
        schema: Type[BaseModel],
        select_fields: Optional[Iterable[str]] = None
    ) -> ListPayloadSchema:
        """Serialize the records and attach pagination metadata.

        Args:
            schema (Type[BaseModel]): Schema used to serialize each record.
            select_fields (Optional[Iterable[str]]): Fields to keep; the
                identifier is always kept.

        Returns:
            ListPayloadSchema: Records and, for paginated results, the
                pagination metadata.
        """
        keep = set(select_fields) | {"id"} if select_fields else None
        records = []
        for record in self.records:
            dumped = schema.model_validate(record).model_dump(mode="json")
            if keep is not None:
                dumped = {
                    key: value for key, value in dumped.items() if key in keep
                }
            records.append(dumped)

        pagination = None
        if self.paginated:
            pagination = PaginationSchema(
                current_page=self.current_page,
                page_size=self.page_size,
                total_pages=self.total_pages,
                prev_page=self.current_page - 1 if self.current_page > 1 else None,
                next_page=(
                    self.current_page + 1
                    if self.current_page < self.total_pages else None
                )
            )
        return ListPayloadSchema(
            records=records,
            total_count=self.total_count,
            pagination=pagination
        )


def get_list_query(
    select_fields: Optional[str] = Query(
        None,
        alias="select",
        description="Fields to be selected, separated by comma",
        examples=["title,description"]
    ),
    sort: Optional[str] = Query(
        None,
        description="Fields to sort by, prefix with '-' for descending order",
        examples=["title,-created_at"]
    ),
    limit: Optional[str] = Query(
        None,
        description="Number of records per page (default 20)"
    ),
    page: Optional[str] = Query(
        None,
        description="One-based page index (default 1)"
    ),
    paging: Optional[str] = Query(
        None,
        description="Set to 'false' to receive every record without pagination"
    ),
    settings: BaseAppSettings = Depends(get_settings)
) -> ListQuery:
    """Parse the list query parameters of the current request."""
    return ListQuery.parse(
        select_fields=select_fields,
        sort=sort,
        limit=limit,
        page=page,
        paging=paging,
        default_page_size=settings.DEFAULT_PAGE_SIZE
    )


def build_criterion(
    model: Type[Base], field_path: str, value: Any
) -> ColumnElement[bool]:
    """Build an equality criterion for a (possibly dotted) field path.

    A dotted path walks through relationships: ``genre_links.genre_id``
    means "any related genre link has this genre id".

    Args:
        model (Type[Base]): Model the path starts from.
        field_path (str): Column name or dotted relationship path.
        value (Any): Value the final column must equal.

    Returns:
        ColumnElement[bool]: The SQL criterion.
    """
    name, _, remainder = field_path.partition(".")
    attribute = getattr(model, name)
    if not remainder:
        return attribute == value

    relationship = attribute.property
    inner = build_criterion(relationship.mapper.class_, remainder, value)
    if relationship.uselist:
        return attribute.any(inner)
    return attribute.has(inner)


def build_loader_options(
    model: Type[Base], paths: Iterable[str]
) -> Iterator[Any]:
    """Yield eager-loading options for dotted relationship paths."""
    for path in paths:
        current = model
        loader = None
        for name in path.split("."):
            attribute = getattr(current, name)
            loader = (
                selectinload(attribute)
                if loader is None else loader.selectinload(attribute)
            )
            current = attribute.property.mapper.class_
        yield loader


def _order_by_clauses(model: Type[Base], sort_fields: Iterable[SortField]):
    mapper = inspect(model)
    column_keys = {attribute.key for attribute in mapper.column_attrs}
    clauses = []
    for sort_field in sort_fields:
        if sort_field.name not in column_keys:
            logger.debug(
                "Ignoring unknown sort field %r for %s",
                sort_field.name,
                model.__tablename__
            )
            continue
        column = getattr(model, sort_field.name)
        clauses.append(column.desc() if sort_field.descending else column.asc())
    clauses.extend(column.asc() for column in mapper.primary_key)
    return clauses


async def execute_list_query(
    db: AsyncSession,
    model: Type[Base],
    query: ListQuery,
    filters: Optional[Mapping[str, Any]] = None,
    populate: Sequence[str] = ()
) -> PaginatedResult:
    """Run the count and fetch queries of a list request.

    Args:
        db (AsyncSession): Database session.
        model (Type[Base]): Model to list.
        query (ListQuery): Parsed list query.
        filters (Optional[Mapping[str, Any]]): Implicit equality filters,
            keyed by field path.
        populate (Sequence[str]): Relationship paths to eager-load.

    Returns:
        PaginatedResult: The requested page.
    """
    criteria = [
        build_criterion(model, field_path, value)
        for field_path, value in (filters or {}).items()
    ]

    count_stmt = select(func.count()).select_from(model).where(*criteria)
    result = await db.execute(count_stmt)
    total_count = result.scalar_one()

    stmt = (
        select(model)
        .where(*criteria)
        .options(*build_loader_options(model, populate))
        .order_by(*_order_by_clauses(model, query.sort_fields))
    )
    if query.paginate and query.offset >= total_count:
        records = []
    else:
        if query.paginate:
            stmt = stmt.offset(query.offset).limit(query.page_size)
        result = await db.execute(stmt)
        records = result.scalars().all()

    logger.debug(
        "Listed %d of %d %s (page=%d, page_size=%d, paginate=%s)",
        len(records),
        total_count,
        model.__tablename__,
        query.page,
        query.page_size,
        query.paginate
    )

    if not query.paginate:
        return PaginatedResult(
            records=records,
            total_count=total_count,
            current_page=DEFAULT_PAGE,
            page_size=max(total_count, 1),
            paginated=False
        )
    return PaginatedResult(
        records=records,
        total_count=total_count,
        current_page=query.page,
        page_size=query.page_size
    )


def _split_fields(raw: Optional[str]) -> Optional[tuple[str, ...]]:
    if not raw:
        return None
    names = []
    for name in raw.split(","):
        name = name.strip()
        if name and name not in names:
            names.append(name)
    return tuple(names) or None


def _positive_int(raw: Optional[str], default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    if value <= 0:
        return default
    return min(value, MAX_INTEGER_ID)
