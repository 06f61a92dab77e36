"""
Step contract and step declarations.

A step implementation is any object with an
`execute(record_list, step_name, options)` method returning a new RecordList.
One implementation may serve several step names by branching on `step_name`,
and one instance may be shared by several pipelines.

    class ProductListSteps:
        def execute(self, record_list, step_name, options):
            if step_name == "base":
                return record_list.update(accumulator=MemoryQuery(rows=PRODUCTS))
            ...
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from .state import RecordList


@runtime_checkable
class Step(Protocol):
    """Protocol every step implementation must satisfy."""

    def execute(self, record_list: RecordList, step_name: str, options: Mapping[str, Any]) -> RecordList:
        ...


@dataclass(frozen=True)
class StepDeclaration:
    """
    One entry of a pipeline definition.

    Attributes:
        name: Step name, unique within the pipeline
        impl: Step implementation; None means "use the default for this name"
        options: Implementation-specific options, read-only once declared
    """

    name: str
    impl: Optional[Step] = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @classmethod
    def from_options(cls, name: str, options: Mapping[str, Any]) -> "StepDeclaration":
        """Build a declaration from an options mapping that may carry an `impl` key."""
        remaining = dict(options)
        impl = remaining.pop("impl", None)
        return cls(name=name, impl=impl, options=remaining)
