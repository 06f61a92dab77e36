"""
In-memory repository.

A reference RecordRepository over a sequence of rows. It is handy in tests,
for small static lists and for lists assembled from an API response, and
it documents what a real data store adapter has to provide.

Queries are lazy: `MemoryQuery` only records predicates, ordering, offset
and limit. Rows are touched when the repository counts or fetches.

Usage:
    query = MemoryQuery(rows=products)
    query = where(query, lambda row: row["in_stock"])
    query = order_by(query, [(SortDirection.ASC_NULLS_LAST, "name")])

    repo = MemoryRepository()
    repo.count(query, "id")           # ignores offset/limit
    repo.all(limit(offset(query, 20), 10))

The module-level helpers double as step callbacks:
    sort=dict(callback=memory.order_by, ...)
    paginate=dict(offset_callback=memory, limit_callback=memory, ...)
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from record_list.domain.base_enums import SortDirection

Predicate = Callable[[Any], bool]
Ordering = Tuple[SortDirection, str]


@dataclass(frozen=True)
class MemoryQuery:
    """An unexecuted query over in-memory rows."""

    rows: Tuple[Any, ...] = ()
    predicates: Tuple[Predicate, ...] = ()
    ordering: Tuple[Ordering, ...] = ()
    offset: int = 0
    limit: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", tuple(self.rows))


def where(query: MemoryQuery, predicate: Predicate) -> MemoryQuery:
    return replace(query, predicates=query.predicates + (predicate,))


def order_by(query: MemoryQuery, ordering: Sequence[Ordering]) -> MemoryQuery:
    """Append orderings; earlier orderings take precedence over later ones."""
    return replace(query, ordering=query.ordering + tuple((SortDirection(d), f) for d, f in ordering))


def offset(query: MemoryQuery, value: int) -> MemoryQuery:
    return replace(query, offset=value)


def limit(query: MemoryQuery, value: int) -> MemoryQuery:
    return replace(query, limit=value)


def field_value(row: Any, name: str) -> Any:
    """Read a field from a mapping row or an object row."""
    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name, None)


class MemoryRepository:
    """RecordRepository evaluating MemoryQuery objects."""

    def count(self, query: MemoryQuery, count_by: str = "id") -> int:
        """
        Count matching rows, ignoring offset and limit.

        Rows whose `count_by` field is None are not counted, like COUNT(column).
        """
        return sum(1 for row in self._matching(query) if field_value(row, count_by) is not None)

    def all(self, query: MemoryQuery) -> List[Any]:
        rows = self._sorted(self._matching(query), query.ordering)
        end = None if query.limit is None else query.offset + query.limit
        return rows[query.offset:end]

    def _matching(self, query: MemoryQuery) -> Iterable[Any]:
        return (row for row in query.rows if all(predicate(row) for predicate in query.predicates))

    def _sorted(self, rows: Iterable[Any], ordering: Sequence[Ordering]) -> List[Any]:
        result = list(rows)
        # Stable sorts applied from the least to the most significant key
        for direction, name in reversed(ordering):
            present = [row for row in result if field_value(row, name) is not None]
            missing = [row for row in result if field_value(row, name) is None]
            present.sort(key=lambda row: field_value(row, name), reverse=direction.descending)
            if direction.nulls_last:
                result = present + missing
            elif direction.descending:
                # Without NULLS LAST, NULL sorts as the largest value
                result = missing + present
            else:
                result = present + missing
        return result
