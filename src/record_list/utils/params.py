"""
Helpers for reading values out of request parameters.

Parameters are plain mappings with string keys whose values may be nested
mappings, e.g. the decoded query string {"paging": {"page": "2"}}.
"""

from types import MappingProxyType
from typing import Any, Mapping, Sequence


def get_in(params: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """
    Follow a path of keys into nested mappings.

    Returns None as soon as a key is missing or an intermediate value is
    not a mapping, so callers can apply their own default.

    Example:
        get_in({"paging": {"page": "2"}}, ["paging", "page"])  # -> "2"
    """
    value: Any = params
    for key in keys:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
        if value is None:
            return None
    return value


def freeze_parameters(value: Any) -> Any:
    """
    Return a read-only copy of a parameters value.

    Mappings become MappingProxyType views over fresh dicts and lists/tuples
    become tuples, recursively. Scalars are returned as they are.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze_parameters(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze_parameters(item) for item in value)
    return value
