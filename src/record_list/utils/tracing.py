"""
Trace ids for record list builds.

A from-parameters call is one logical unit of work: `trace_scope()` gives it
a fresh trace id for its duration and restores the previous (empty) context
afterwards. A trace id set by the caller, e.g. a web request id, is kept.
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator, Optional

trace_id_var: ContextVar[Optional[str]] = ContextVar('trace_id', default=None)


def generate_trace_id() -> str:
    """Generate a new trace ID."""
    return str(uuid.uuid4())


def set_trace_id(trace_id: Optional[str]) -> Token:
    """Set the trace ID for the current context; the token undoes it."""
    return trace_id_var.set(trace_id)


def current_trace_id() -> Optional[str]:
    """Get the current trace ID."""
    return trace_id_var.get()


@contextmanager
def trace_scope() -> Iterator[str]:
    """
    Yield the caller's trace id, or a new one that lives only inside the block.

    Usage:
        with trace_scope() as trace_id:
            logger.debug("Building record list", trace_id=trace_id)
    """
    trace_id = current_trace_id()
    if trace_id is not None:
        yield trace_id
        return

    trace_id = generate_trace_id()
    token = trace_id_var.set(trace_id)
    try:
        yield trace_id
    finally:
        trace_id_var.reset(token)
