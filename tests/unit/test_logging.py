import pytest
from record_list.utils.logging import configure_logging, get_logger, get_module_logger
from record_list.utils.tracing import current_trace_id, generate_trace_id, set_trace_id, trace_scope, trace_id_var


@pytest.fixture(autouse=True)
def clean_trace_context():
    token = trace_id_var.set(None)
    yield
    trace_id_var.reset(token)


def test_logger_configuration():
    configure_logging()
    configure_logging()  # second call is a no-op
    logger = get_logger("test")
    assert logger is not None


def test_module_logger():
    assert get_module_logger() is not None


def test_trace_id_generation():
    trace_id = generate_trace_id()
    assert len(trace_id) == 36  # UUID format
    assert '-' in trace_id


def test_trace_id_context():
    test_id = "test-trace-123"
    token = set_trace_id(test_id)
    assert current_trace_id() == test_id
    trace_id_var.reset(token)
    assert current_trace_id() is None


def test_trace_scope_creates_and_clears_an_id():
    with trace_scope() as trace_id:
        assert current_trace_id() == trace_id
        assert len(trace_id) == 36
    assert current_trace_id() is None


def test_trace_scope_gives_each_block_its_own_id():
    with trace_scope() as first:
        pass
    with trace_scope() as second:
        pass
    assert first != second


def test_trace_scope_keeps_caller_id():
    set_trace_id("request-42")
    with trace_scope() as trace_id:
        assert trace_id == "request-42"
    assert current_trace_id() == "request-42"


def test_trace_scope_resets_on_error():
    with pytest.raises(ValueError):
        with trace_scope():
            raise ValueError("boom")
    assert current_trace_id() is None
