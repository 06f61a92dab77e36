"""
Record list state threaded through the step pipeline.

A RecordList is an immutable value: every step returns a new instance built
from the one it received (see `RecordList.update`), so two call chains never
share a mutable accumulator.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from record_list.utils.params import freeze_parameters

from .pagination import Pagination


@dataclass(frozen=True)
class RecordList:
    """
    State collected while building a list of records.

    Attributes:
        accumulator: Step-defined work in progress, e.g. an unexecuted query.
            Only the steps that put something here know its shape.
        parameters: Caller-supplied parameters (string keys, nested mappings
            allowed). The source of configuration for every step. Read-only:
            nested mappings are MappingProxyType views and lists are tuples.
        pagination: Pagination descriptor, set by a paginating step.
        loaded: True once a retrieval step has populated `results`. An empty
            `results` list with loaded=True means "the query matched nothing".
        results: Records retrieved by executing the accumulator.
        executed_steps: Names of the steps that have run, most recent first.
        extra: Side-channel data shared between steps.
    """

    accumulator: Any = None
    parameters: Mapping[str, Any] = field(default_factory=dict)
    pagination: Optional[Pagination] = None
    loaded: bool = False
    results: List[Any] = field(default_factory=list)
    executed_steps: Tuple[str, ...] = ()
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", freeze_parameters(self.parameters))

    @classmethod
    def from_parameters(cls, parameters: Mapping[str, Any]) -> "RecordList":
        """Start a fresh record list from its own read-only copy of the parameters."""
        return cls(parameters=parameters)

    def update(self, **changes: Any) -> "RecordList":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def add_step(self, step: str) -> "RecordList":
        """
        Record `step` as the most recently executed step.

        Re-adding a step that is already in the history is a no-op, so
        a name never appears twice.
        """
        if self.executed_steps and self.executed_steps[0] == step:
            return self
        if step in self.executed_steps:
            return self
        return replace(self, executed_steps=(step,) + self.executed_steps)

    def has_run(self, step: str) -> bool:
        return step in self.executed_steps
