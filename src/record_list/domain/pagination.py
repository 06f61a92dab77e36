"""
Pagination descriptor and calculator.

`build_pagination` turns a requested page, a page size and the total number of
matching records into a complete, immutable `Pagination` descriptor:

    >>> p = build_pagination("2", "10", 100)
    >>> (p.records_offset, p.records_from, p.records_to, p.previous_page, p.next_page)
    (10, 11, 20, 1, 3)

Rules:
- current_page defaults to 1 when absent and is floored to 1
- per_page has no default; a missing value is the caller's configuration problem
- a page past the last one is not clamped; offsets are computed mechanically
- zero records means no pages, no navigation, records_from == 0 and no records_to
"""

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError, ParameterError

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class Pagination(BaseModel):
    """Describes the page of records being viewed within the full result set."""

    model_config = ConfigDict(frozen=True)

    per_page: int = Field(..., ge=1, description="Number of records per page")
    current_page: int = Field(..., ge=1, description="Page being viewed (1-based)")

    # Records info
    records_count: int = Field(..., ge=0, description="Total records matching the query before paging")
    records_offset: int = Field(..., ge=0, description="Records skipped before this page, records_from - 1")
    records_from: int = Field(..., ge=0, description="1-based position of the first record on this page, 0 when empty")
    records_to: Optional[int] = Field(default=None, description="1-based position of the last record on this page")

    # Pages info
    total_pages: int = Field(..., ge=0, description="Number of pages in the full result set")
    next_page: Optional[int] = Field(default=None, description="Page number after this one, if any")
    previous_page: Optional[int] = Field(default=None, description="Page number before this one, if any")

    @classmethod
    def build(cls, current_page: Any, per_page: Any, records_count: Any) -> "Pagination":
        """Alias of build_pagination()."""
        return build_pagination(current_page, per_page, records_count)


def ensure_integer(value: Any, default: Optional[int] = None) -> int:
    """
    Coerce a parameter value to an int.

    None and "" fall back to `default`; when there is no default either,
    that is an error. Integers pass through, strings must be an optional
    sign followed by ASCII digits, nothing else. Everything else (floats, bools, "2.5") fails.

    Raises:
        ParameterError: If the value cannot be used as an integer
    """
    if value is None or value == "":
        if default is None:
            raise ParameterError(
                "Value is missing and no default was given",
                details={"value": value},
            )
        return default

    if isinstance(value, bool):
        raise ParameterError(f"Value {value!r} not parsable as an integer", details={"value": value})

    if isinstance(value, int):
        return value

    if isinstance(value, str) and _INTEGER_PATTERN.fullmatch(value):
        return int(value)

    raise ParameterError(f"Value {value!r} not parsable as an integer", details={"value": value})


def build_pagination(current_page: Any, per_page: Any, records_count: Any) -> Pagination:
    """
    Build a Pagination descriptor.

    Args:
        current_page: Requested page; int or numeric string, None means 1
        per_page: Page size; int or numeric string, required
        records_count: Total records matching the query

    Returns:
        Pagination with offsets and navigation filled in

    Raises:
        ConfigurationError: If per_page is missing
        ParameterError: If a value is unparsable or out of range
    """
    if per_page is None or per_page == "":
        raise ConfigurationError("per_page is required to build a pagination", details={"per_page": per_page})

    page = max(ensure_integer(current_page, 1), 1)
    size = ensure_integer(per_page)
    count = ensure_integer(records_count)

    if size < 1:
        raise ParameterError(f"per_page must be at least 1, got {size}", details={"per_page": size})
    if count < 0:
        raise ParameterError(
            f"records_count can't be negative, got {count}",
            details={"records_count": count},
        )

    # Offset is 0 for the first page
    offset = (page - 1) * size
    total_pages = -(-count // size)

    if count == 0:
        return Pagination(
            per_page=size,
            current_page=page,
            records_count=0,
            records_offset=offset,
            records_from=0,
            total_pages=0,
        )

    next_page = None if page == total_pages else page + 1
    previous_page = None if page <= 1 else page - 1

    records_from = 1 if previous_page is None else offset + 1

    if count < size or next_page is None:
        records_to = count
    else:
        records_to = page * size

    return Pagination(
        per_page=size,
        current_page=page,
        records_count=count,
        records_offset=offset,
        records_from=records_from,
        records_to=records_to,
        total_pages=total_pages,
        next_page=next_page,
        previous_page=previous_page,
    )
