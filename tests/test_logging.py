import logging

from sipcalc.utils.logging import ContextFilter, SimpleStructuredFormatter, get_logger, set_log_context, set_operation


def test_structured_line_carries_context():
    set_log_context(request_id="req-1", session_id="sess-1", operation="simulate")
    record = logging.LogRecord("sip_engine", logging.INFO, __file__, 1, "years=%s", (10,), None)
    ContextFilter().filter(record)

    line = SimpleStructuredFormatter().format(record)
    assert "level=INFO" in line
    assert "logger=sip_engine" in line
    assert "request_id=req-1" in line
    assert "session_id=sess-1" in line
    assert "operation=simulate" in line
    assert line.endswith("msg=years=10")


def test_get_logger_is_named():
    assert get_logger("sip_tools").name == "sip_tools"


def test_set_operation_replaces_operation_only():
    set_log_context(request_id="req-2", operation="simulate")
    set_operation("deflate")
    record = logging.LogRecord("sip_cli", logging.INFO, __file__, 1, "done", (), None)
    ContextFilter().filter(record)

    line = SimpleStructuredFormatter().format(record)
    assert "request_id=req-2" in line
    assert "operation=deflate" in line
