"""
Domain package for the record_list library.

This package contains the value types and contracts shared by the pipeline,
the default steps and the repositories.
"""

from .base_enums import SortDirection, StepName
from .errors import (
    ConfigurationError,
    MissingOptionError,
    ParameterError,
    RecordListException,
    StepConfigurationError,
    UnknownStepError,
)
from .pagination import Pagination, build_pagination, ensure_integer
from .repository import RecordRepository
from .state import RecordList
from .step import Step, StepDeclaration

__all__ = [
    # Enums
    "SortDirection",
    "StepName",

    # Errors
    "RecordListException",
    "ConfigurationError",
    "StepConfigurationError",
    "MissingOptionError",
    "ParameterError",
    "UnknownStepError",

    # Pagination
    "Pagination",
    "build_pagination",
    "ensure_integer",

    # State and contracts
    "RecordList",
    "RecordRepository",
    "Step",
    "StepDeclaration",
]
