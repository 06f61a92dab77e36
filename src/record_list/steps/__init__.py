"""
Default step implementations.

DEFAULT_STEPS is the mapping consulted when a pipeline declares one of the
well-known step names without an implementation. Pass your own mapping to
RecordListPipeline(defaults=...) to replace it.
"""

from types import MappingProxyType
from typing import Mapping

from record_list.domain.base_enums import StepName
from record_list.domain.step import Step

from .paginate import PaginateStep
from .retrieve import RetrieveStep
from .sort import SortStep

DEFAULT_STEPS: Mapping[str, Step] = MappingProxyType({
    StepName.SORT.value: SortStep(),
    StepName.PAGINATE.value: PaginateStep(),
    StepName.RETRIEVE.value: RetrieveStep(),
})

__all__ = [
    "DEFAULT_STEPS",
    "PaginateStep",
    "RetrieveStep",
    "SortStep",
]
