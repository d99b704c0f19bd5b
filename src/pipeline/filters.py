from dataclasses import dataclass
from typing import Any, Sequence, Type

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from database.models.base import Base
from pipeline.references import coerce_identifier, ensure_exists


@dataclass(frozen=True)
class PathParamRule:
    """Maps a nested route parameter onto a list filter.

    ``field`` is the column (or dotted relationship path) of the listed
    model, ``param`` the path parameter holding the identifier and ``model``
    the model the identifier must exist in.
    """
    field: str
    param: str
    model: Type[Base]


class PathParamsFilter:
    """Dependency turning nested route parameters into implicit filters.

    Rules whose parameter is not part of the matched route are skipped, so
    the same dependency serves both ``/halls/`` and
    ``/cinemas/{cinema_id}/halls/``.
    """

    def __init__(self, rules: Sequence[PathParamRule]):
        self.rules = tuple(rules)

    async def __call__(
        self,
        request: Request,
        db: AsyncSession = Depends(get_db)
    ) -> dict[str, Any]:
        """Resolve the filters of the current request.

        Raises:
            NotFoundError: If a referenced identifier does not exist.
        """
        filters: dict[str, Any] = {}
        for rule in self.rules:
            raw_value = request.path_params.get(rule.param)
            if raw_value is None:
                continue
            value = coerce_identifier(raw_value)
            await ensure_exists(db, rule.model, value)
            filters[rule.field] = value
        return filters
