"""
record_list: stepwise construction of paginated, sortable record lists.

A typical pipeline:

    params -> base query -> sort -> filter -> paginate -> retrieve

Each named step can be called with raw parameters (running every earlier
step first) or with a RecordList that already went through the earlier steps.
"""

from record_list.domain import (
    ConfigurationError,
    MissingOptionError,
    Pagination,
    ParameterError,
    RecordList,
    RecordListException,
    RecordRepository,
    SortDirection,
    Step,
    StepConfigurationError,
    StepDeclaration,
    StepName,
    UnknownStepError,
    build_pagination,
)
from record_list.pipeline import BoundStep, RecordListPipeline
from record_list.steps import DEFAULT_STEPS, PaginateStep, RetrieveStep, SortStep

__all__ = [
    "BoundStep",
    "ConfigurationError",
    "DEFAULT_STEPS",
    "MissingOptionError",
    "PaginateStep",
    "Pagination",
    "ParameterError",
    "RecordList",
    "RecordListException",
    "RecordListPipeline",
    "RecordRepository",
    "RetrieveStep",
    "SortDirection",
    "SortStep",
    "Step",
    "StepConfigurationError",
    "StepDeclaration",
    "StepName",
    "UnknownStepError",
    "build_pagination",
]
