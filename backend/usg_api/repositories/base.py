from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union

RecordId = Union[int, str]
Record = dict[str, Any]

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Comparison operators accepted by ``find_by_condition``, keyed by every
# spelling callers may use.
_OPERATORS: dict[str, str] = {
    "eq": "eq",
    "=": "eq",
    "==": "eq",
    "gt": "gt",
    ">": "gt",
    "gte": "gte",
    ">=": "gte",
    "lt": "lt",
    "<": "lt",
    "lte": "lte",
    "<=": "lte",
    "ilike": "ilike",
}


class BaseRepository(ABC):
    """Uniform CRUD contract over one table.

    Subclasses set ``table_name``.  The two backend adapters
    (:class:`~usg_api.repositories.supabase.SupabaseRepository` and
    :class:`~usg_api.repositories.postgres.PostgresRepository`) implement the
    abstract operations; entity repositories only add domain queries built on
    top of them, so one entity class runs unchanged against either backend.

    Filters are exact-match conjunctions.  Filter entries whose value is
    ``None`` are skipped rather than matched against ``NULL``.
    """

    table_name: str = ""

    def __init__(self, client: Any) -> None:
        if not self.table_name:
            raise TypeError(f"{type(self).__name__} does not define table_name")
        check_identifier(self.table_name)
        self._client = client

    # ------------------------------------------------------------------
    # Contract
    # ------------------------------------------------------------------

    @abstractmethod
    async def find_all(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        order_direction: str = "asc",
        limit: Optional[int] = None,
    ) -> list[Record]:
        """Return rows matching every filter, optionally sorted and capped."""

    @abstractmethod
    async def find_by_id(self, id: RecordId) -> Record:
        """Return one row or raise ``RecordNotFoundError``."""

    @abstractmethod
    async def find_one(self, filters: Mapping[str, Any]) -> Record:
        """Return the single row matching *filters* or raise ``RecordNotFoundError``."""

    @abstractmethod
    async def create(self, data: Mapping[str, Any]) -> Record:
        """Insert one row and return it with generated columns filled in."""

    @abstractmethod
    async def update(self, id: RecordId, data: Mapping[str, Any]) -> Record:
        """Patch one row by id; raise ``RecordNotFoundError`` when nothing matched."""

    @abstractmethod
    async def delete(self, id: RecordId) -> bool:
        """Remove one row by id.

        Returns ``True`` when a row was removed and ``False`` when it was
        already absent.  Absence is never an error.
        """

    @abstractmethod
    async def count(self, filters: Optional[Mapping[str, Any]] = None) -> int:
        ...

    @abstractmethod
    async def sum(self, column: str, filters: Optional[Mapping[str, Any]] = None) -> float:
        """Sum of the absolute values of *column*; ``0.0`` when no rows match."""

    @abstractmethod
    async def find_by_condition(self, column: str, operator: str, value: Any) -> list[Record]:
        """Return rows where ``column <operator> value``."""

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _active_filters(filters: Optional[Mapping[str, Any]]) -> dict[str, Any]:
        if not filters:
            return {}
        active = {k: v for k, v in filters.items() if v is not None}
        for column in active:
            check_identifier(column)
        return active

    @staticmethod
    def _normalize_direction(order_direction: str) -> str:
        direction = (order_direction or "asc").lower()
        if direction not in ("asc", "desc"):
            raise ValueError(f"Invalid order direction: {order_direction!r}")
        return direction

    @staticmethod
    def _normalize_operator(operator: str) -> str:
        try:
            return _OPERATORS[operator.strip().lower()]
        except KeyError:
            raise ValueError(f"Unsupported comparison operator: {operator!r}") from None


def check_identifier(name: str) -> str:
    """Reject anything that is not a plain SQL identifier."""
    if not isinstance(name, str) or not _IDENTIFIER_RE.match(name):
        raise ValueError(f"Invalid column or table name: {name!r}")
    return name
