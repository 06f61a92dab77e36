"""
Repository contract consumed by the default paginate and retrieve steps.

Any data store can back a record list as long as it can count and fetch the
records described by the step accumulator (an ORM query, a SQL builder, an
in-memory MemoryQuery, ...).
"""

from typing import Any, Iterable, Protocol, runtime_checkable


@runtime_checkable
class RecordRepository(Protocol):
    """Counts and fetches the records matched by a query."""

    def count(self, query: Any, count_by: str) -> int:
        """Number of records matched by `query`, ignoring any offset/limit."""
        ...

    def all(self, query: Any) -> Iterable[Any]:
        """Records matched by `query`, honouring offset/limit."""
        ...
