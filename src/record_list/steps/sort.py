"""
Default sort step.

Reads the sort field and order from the parameters (falling back to the
declared defaults) and hands them to a callback that orders the accumulator.

    sort=dict(
        callback=memory.order_by,      # or any object exposing order_by(query, ordering)
        default_sort="name",
        default_order="asc",
        sort_keys=["sort"],            # params["sort"]
        order_keys=["order"],          # params["order"]
        nulls_last=True,               # asc -> asc_nulls_last
    )

The callback receives the query and a list of (SortDirection, field) pairs,
e.g. [(SortDirection.ASC_NULLS_LAST, "name")], and returns the new query.

Configuration:
    callback: required
    default_sort / default_order: required unless always present in parameters
    sort_keys / order_keys / nulls_last: default to the settings' sort section
"""

from typing import Any, Mapping

from record_list.config import get_settings
from record_list.domain.base_enums import SortDirection, StepName
from record_list.domain.errors import ParameterError
from record_list.domain.state import RecordList
from record_list.utils.logging import get_module_logger
from record_list.utils.params import get_in
from record_list.utils.tracing import current_trace_id

from .options import apply_callback, ensure_handled, require_option

logger = get_module_logger()


class SortStep:
    """Orders the accumulator by a single field."""

    def execute(self, record_list: RecordList, step_name: str, options: Mapping[str, Any]) -> RecordList:
        ensure_handled(step_name, StepName.SORT.value, self)

        sort = self._get_sort(record_list.parameters, step_name, options)
        direction = self._get_direction(record_list.parameters, step_name, options)
        callback = require_option(options, step_name, "callback")

        logger.debug(
            "Applying sort",
            step=step_name,
            sort=sort,
            direction=direction.value,
            trace_id=current_trace_id(),
        )

        query = apply_callback(
            callback, "order_by", record_list.accumulator, [(direction, sort)], step_name, "callback"
        )
        return record_list.update(accumulator=query)

    def _get_sort(self, params: Mapping[str, Any], step_name: str, options: Mapping[str, Any]) -> str:
        path = options.get("sort_keys", get_settings().sort.sort_keys)
        return get_in(params, path) or require_option(options, step_name, "default_sort")

    def _get_direction(self, params: Mapping[str, Any], step_name: str, options: Mapping[str, Any]) -> SortDirection:
        path = options.get("order_keys", get_settings().sort.order_keys)
        order = get_in(params, path) or require_option(options, step_name, "default_order")
        direction = to_direction(order)

        if options.get("nulls_last", get_settings().sort.nulls_last):
            return direction.with_nulls_last()
        return direction


def to_direction(order: Any) -> SortDirection:
    """
    Turn "asc"/"desc" (any case) or a SortDirection into a SortDirection.

    Raises:
        ParameterError: If the order is not a known direction
    """
    if isinstance(order, SortDirection):
        return order
    if isinstance(order, str):
        try:
            return SortDirection(order.strip().lower())
        except ValueError:
            pass
    raise ParameterError(
        f"Unknown sort order {order!r}",
        details={"order": order, "allowed": [d.value for d in SortDirection]},
    )
