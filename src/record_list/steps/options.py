"""Option helpers shared by the default step implementations."""

from typing import Any, Callable, Mapping

from record_list.domain.errors import MissingOptionError, StepConfigurationError


def require_option(options: Mapping[str, Any], step: str, key: str) -> Any:
    """Fetch a required option or raise MissingOptionError naming the step."""
    value = options.get(key)
    if value is None:
        raise MissingOptionError(step, key)
    return value


def ensure_handled(step: str, handled: str, impl: object) -> None:
    """Default steps serve a single step name; anything else is a wiring mistake."""
    if step != handled:
        raise StepConfigurationError(
            f"{type(impl).__name__} handles the '{handled}' step, not '{step}'",
            details={"step": step, "handled": handled},
        )


def apply_callback(callback: Any, method: str, query: Any, value: Any, step: str, option: str) -> Any:
    """
    Call a query-modifying callback.

    `callback` is either an object exposing `method(query, value)` (a module
    such as record_list.repositories.memory, or a query-builder class) or a
    plain callable taking `(query, value)`.
    """
    bound: Callable[[Any, Any], Any] | None = getattr(callback, method, None)
    if callable(bound):
        return bound(query, value)
    if callable(callback):
        return callback(query, value)
    raise StepConfigurationError(
        f"Option '{option}' of step '{step}' must be a callable taking (query, value) "
        f"or an object exposing {method}(query, value)",
        details={"step": step, "option": option},
    )
