"""
Default retrieve step.

Executes the accumulator against the configured repository, assigns the
rows to `results` and marks the record list as loaded.

Configuration:
    repo: RecordRepository exposing all(query) (required)
"""

from datetime import datetime, timezone
from typing import Any, Mapping

from record_list.domain.base_enums import StepName
from record_list.domain.state import RecordList
from record_list.utils.logging import get_module_logger
from record_list.utils.tracing import current_trace_id

from .options import ensure_handled, require_option

logger = get_module_logger()


class RetrieveStep:
    """Loads the records described by the accumulator."""

    def execute(self, record_list: RecordList, step_name: str, options: Mapping[str, Any]) -> RecordList:
        ensure_handled(step_name, StepName.RETRIEVE.value, self)
        repo = require_option(options, step_name, "repo")

        start_time = datetime.now(timezone.utc)
        records = list(repo.all(record_list.accumulator))
        execution_time_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000

        logger.info(
            "Retrieved records",
            step=step_name,
            row_count=len(records),
            execution_time_ms=round(execution_time_ms, 2),
            trace_id=current_trace_id(),
        )

        return record_list.update(results=records, loaded=True)
