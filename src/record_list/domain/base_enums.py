from enum import Enum


class StepName(str, Enum):
    """Well-known step names that have default implementations."""
    SORT = "sort"
    PAGINATE = "paginate"
    RETRIEVE = "retrieve"


class SortDirection(str, Enum):
    """Directions handed to a sort callback."""
    ASC = "asc"
    DESC = "desc"
    ASC_NULLS_LAST = "asc_nulls_last"
    DESC_NULLS_LAST = "desc_nulls_last"

    @property
    def descending(self) -> bool:
        return self in (SortDirection.DESC, SortDirection.DESC_NULLS_LAST)

    @property
    def nulls_last(self) -> bool:
        return self in (SortDirection.ASC_NULLS_LAST, SortDirection.DESC_NULLS_LAST)

    def with_nulls_last(self) -> "SortDirection":
        if self is SortDirection.ASC:
            return SortDirection.ASC_NULLS_LAST
        if self is SortDirection.DESC:
            return SortDirection.DESC_NULLS_LAST
        return self
