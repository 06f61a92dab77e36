"""
Record list pipeline.

A pipeline is a fixed, ordered list of named steps. Each step can be run in
two ways:

- from parameters: start a fresh RecordList from the parameters and run
  every step declared before the target, then the target itself
- from state: run only the target step on a RecordList that already went
  through the preceding steps (the caller's responsibility)

Usage:
    from record_list import RecordListPipeline
    from record_list.repositories import memory

    repo = memory.MemoryRepository()
    products = RecordListPipeline(
        [
            ("base", {"impl": ProductBase()}),
            ("sort", {"callback": memory.order_by, "default_sort": "name", "default_order": "asc"}),
            ("paginate", {"repo": repo, "per_page": 20,
                          "offset_callback": memory, "limit_callback": memory}),
            ("retrieve", {"repo": repo}),
        ],
        name="products",
    )

    first_page = products.paginate({"page": "1"})    # base -> sort -> paginate
    first_page.executed_steps                       # ("paginate", "sort", "base")
    loaded = products.retrieve(first_page)          # retrieve only
    loaded = products.step({"page": "2"}, "retrieve")

sort, paginate and retrieve fall back to DEFAULT_STEPS when declared without
an implementation; any other step must name its `impl`.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from record_list.domain.errors import StepConfigurationError, UnknownStepError
from record_list.domain.state import RecordList
from record_list.domain.step import Step, StepDeclaration
from record_list.steps import DEFAULT_STEPS
from record_list.utils.logging import get_module_logger
from record_list.utils.tracing import current_trace_id, trace_scope

logger = get_module_logger()

StepInput = Union[RecordList, Mapping[str, Any]]
StepDefinitions = Union[
    Mapping[str, Mapping[str, Any]],
    Iterable[Union[StepDeclaration, Tuple[str, Mapping[str, Any]]]],
]


class BoundStep:
    """A declared step together with its two calling conventions."""

    def __init__(self, pipeline: "RecordListPipeline", declaration: StepDeclaration):
        self.pipeline = pipeline
        self.declaration = declaration

    @property
    def name(self) -> str:
        return self.declaration.name

    def from_state(self, record_list: RecordList) -> RecordList:
        return self.pipeline.run_from_state(self.name, record_list)

    def from_parameters(self, parameters: Mapping[str, Any]) -> RecordList:
        return self.pipeline.run_from_parameters(self.name, parameters)

    def __call__(self, value: StepInput) -> RecordList:
        return self.pipeline.step(value, self.name)

    def __repr__(self) -> str:
        return f"<BoundStep {self.pipeline.name}.{self.name}>"


class RecordListPipeline:
    """
    Builds record lists by running parameters through an ordered list of steps.

    Implementations are resolved once, when the pipeline is built. A step
    without an implementation and without a default fails immediately with a
    StepConfigurationError naming the step.

    Step failures are never caught: whatever a step raises reaches the caller,
    and the partially built record list is dropped with the call.
    """

    def __init__(
        self,
        steps: StepDefinitions,
        defaults: Optional[Mapping[str, Step]] = None,
        name: Optional[str] = None,
    ):
        self.name = name or type(self).__name__
        self._defaults: Mapping[str, Step] = DEFAULT_STEPS if defaults is None else defaults
        self._declarations: Dict[str, StepDeclaration] = {}

        for declaration in self._normalize(steps):
            if declaration.name in self._declarations:
                raise StepConfigurationError(
                    f"Step '{declaration.name}' is declared more than once",
                    details={"step": declaration.name, "pipeline": self.name},
                )
            self._declarations[declaration.name] = self._resolve(declaration)

        self._order: Tuple[str, ...] = tuple(self._declarations)

        logger.info("Record list pipeline built", pipeline=self.name, steps=list(self._order))

    # =========================================================================
    # Build time
    # =========================================================================

    @staticmethod
    def _normalize(steps: StepDefinitions) -> List[StepDeclaration]:
        items: Iterable[Any] = steps.items() if isinstance(steps, Mapping) else steps
        declarations = []
        for item in items:
            if isinstance(item, StepDeclaration):
                declarations.append(item)
            else:
                step_name, options = item
                declarations.append(StepDeclaration.from_options(step_name, options or {}))
        return declarations

    def _resolve(self, declaration: StepDeclaration) -> StepDeclaration:
        impl = declaration.impl
        if impl is None:
            impl = self._defaults.get(declaration.name)
        if isinstance(impl, type):
            # impl=SortStep is shorthand for impl=SortStep()
            impl = impl()
        if impl is None:
            raise StepConfigurationError(
                f"Step '{declaration.name}' has no implementation and no default exists for it",
                details={"step": declaration.name, "pipeline": self.name},
            )
        if not isinstance(impl, Step):
            raise StepConfigurationError(
                f"Implementation of step '{declaration.name}' has no execute(record_list, step_name, options) method",
                details={"step": declaration.name, "pipeline": self.name, "impl": repr(impl)},
            )
        return StepDeclaration(name=declaration.name, impl=impl, options=declaration.options)

    # =========================================================================
    # Introspection
    # =========================================================================

    @property
    def step_names(self) -> Tuple[str, ...]:
        return self._order

    def declaration(self, step_name: str) -> StepDeclaration:
        try:
            return self._declarations[step_name]
        except KeyError:
            raise UnknownStepError(step_name, list(self._order)) from None

    def __contains__(self, step_name: object) -> bool:
        return step_name in self._declarations

    def __getitem__(self, step_name: str) -> BoundStep:
        return BoundStep(self, self.declaration(step_name))

    def __getattr__(self, attr: str) -> BoundStep:
        # Only reached when normal lookup fails: pipeline.paginate(...)
        declarations = self.__dict__.get("_declarations", {})
        if attr in declarations:
            return BoundStep(self, declarations[attr])
        raise AttributeError(f"{type(self).__name__!r} object has no attribute or step {attr!r}")

    def __repr__(self) -> str:
        return f"<RecordListPipeline {self.name} steps={list(self._order)}>"

    # =========================================================================
    # Execution
    # =========================================================================

    def run_from_state(self, step_name: str, record_list: RecordList) -> RecordList:
        """
        Run a single step on a record list.

        The record list is expected to have gone through every step declared
        before `step_name`; this is not checked.
        """
        declaration = self.declaration(step_name)
        trace_id = current_trace_id()

        logger.debug("Executing step", pipeline=self.name, step=step_name, trace_id=trace_id)

        try:
            result = declaration.impl.execute(record_list, step_name, declaration.options)
        except Exception as e:
            logger.error(
                "Step failed",
                pipeline=self.name,
                step=step_name,
                error=str(e),
                error_type=type(e).__name__,
                trace_id=trace_id,
            )
            raise

        if not isinstance(result, RecordList):
            raise StepConfigurationError(
                f"Step '{step_name}' returned {type(result).__name__} instead of a RecordList",
                details={"step": step_name, "pipeline": self.name},
            )

        return result.add_step(step_name)

    def run_from_parameters(self, step_name: str, parameters: Mapping[str, Any]) -> RecordList:
        """Run every step up to and including `step_name` on fresh parameters."""
        target = self._order.index(self.declaration(step_name).name)
        with trace_scope() as trace_id:
            logger.debug(
                "Building record list",
                pipeline=self.name,
                target=step_name,
                steps=list(self._order[: target + 1]),
                trace_id=trace_id,
            )

            record_list = RecordList.from_parameters(parameters)
            for name in self._order[:target]:
                record_list = self.run_from_state(name, record_list)
            return self.run_from_state(step_name, record_list)

    def step(self, value: StepInput, step_name: str) -> RecordList:
        """Run `step_name` from a RecordList or from raw parameters."""
        if isinstance(value, RecordList):
            return self.run_from_state(step_name, value)
        if isinstance(value, Mapping):
            return self.run_from_parameters(step_name, value)
        raise TypeError(
            f"Step '{step_name}' expects a RecordList or a parameters mapping, got {type(value).__name__}"
        )

    def run_through(self, step_name: str, value: StepInput) -> RecordList:
        return self.step(value, step_name)

    def run_all(self, value: StepInput) -> RecordList:
        """Run the pipeline up to its last declared step."""
        if not self._order:
            raise StepConfigurationError(f"Pipeline '{self.name}' declares no steps", details={"pipeline": self.name})
        return self.step(value, self._order[-1])

