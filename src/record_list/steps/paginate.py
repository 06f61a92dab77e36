"""
Default paginate step.

Naive offset + limit pagination:
1. Count the records matched by the accumulator (repo.count(query, count_by))
2. Read page / per_page from the parameters
3. Build the Pagination descriptor
4. Apply offset and limit to the accumulator

Configuration:
    repo: RecordRepository used for counting (required)
    per_page: page size when the parameters carry none (required in that case)
    max_per_page: optional upper bound for a requested page size
    count_by: field to count on (default: settings.pagination.count_by)
    page_keys: path to the page in the parameters (default ["page"])
    per_page_keys: path to the page size in the parameters (default ["per_page"])
    offset_callback: callable (query, offset) or object exposing offset(query, offset) (required)
    limit_callback: callable (query, limit) or object exposing limit(query, limit) (required)

The result carries the descriptor in `record_list.pagination`:

    Pagination(per_page=10, current_page=2, records_count=95, records_offset=10,
               records_from=11, records_to=20, total_pages=10, next_page=3, previous_page=1)
"""

from typing import Any, Mapping, Optional

from record_list.config import get_settings
from record_list.domain.base_enums import StepName
from record_list.domain.errors import MissingOptionError, StepConfigurationError
from record_list.domain.pagination import build_pagination, ensure_integer
from record_list.domain.state import RecordList
from record_list.utils.logging import get_module_logger
from record_list.utils.params import get_in
from record_list.utils.tracing import current_trace_id

from .options import apply_callback, ensure_handled, require_option

logger = get_module_logger()


class PaginateStep:
    """Counts the matching records and narrows the accumulator to one page."""

    def execute(self, record_list: RecordList, step_name: str, options: Mapping[str, Any]) -> RecordList:
        ensure_handled(step_name, StepName.PAGINATE.value, self)
        settings = get_settings().pagination

        repo = require_option(options, step_name, "repo")
        offset_callback = require_option(options, step_name, "offset_callback")
        limit_callback = require_option(options, step_name, "limit_callback")
        count_by = options.get("count_by", settings.count_by)

        per_page = self._get_per_page(record_list.parameters, step_name, options)
        current_page = get_in(record_list.parameters, options.get("page_keys", settings.page_keys))

        count = repo.count(record_list.accumulator, count_by)
        pagination = build_pagination(current_page, per_page, count)

        query = apply_callback(
            offset_callback, "offset", record_list.accumulator, pagination.records_offset,
            step_name, "offset_callback",
        )
        query = apply_callback(limit_callback, "limit", query, pagination.per_page, step_name, "limit_callback")

        logger.debug(
            "Paginated record list",
            step=step_name,
            records_count=pagination.records_count,
            current_page=pagination.current_page,
            per_page=pagination.per_page,
            total_pages=pagination.total_pages,
            trace_id=current_trace_id(),
        )

        return record_list.update(accumulator=query, pagination=pagination)

    def _get_per_page(self, params: Mapping[str, Any], step_name: str, options: Mapping[str, Any]) -> int:
        path = options.get("per_page_keys", get_settings().pagination.per_page_keys)
        requested = get_in(params, path)
        max_per_page = self._get_max_per_page(step_name, options)

        if requested is None or requested == "":
            if options.get("per_page") is None:
                raise MissingOptionError(
                    step_name,
                    "per_page",
                    f"Step '{step_name}' needs a per_page option when the parameters carry no page size",
                )
            return ensure_integer(options["per_page"])

        per_page = ensure_integer(requested)
        if max_per_page is not None and per_page > max_per_page:
            logger.warning(
                "Requested per_page capped at max_per_page",
                requested=per_page,
                max_allowed=max_per_page,
                trace_id=current_trace_id(),
            )
            return max_per_page
        return per_page

    def _get_max_per_page(self, step_name: str, options: Mapping[str, Any]) -> Optional[int]:
        value = options.get("max_per_page")
        if value is None:
            return None
        max_per_page = ensure_integer(value)
        if max_per_page < 1:
            raise StepConfigurationError(
                f"Option 'max_per_page' of step '{step_name}' must be at least 1, got {max_per_page}",
                details={"step": step_name, "option": "max_per_page", "value": max_per_page},
            )
        return max_per_page
