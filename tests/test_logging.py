import logging

from storyhub.logging_config import RequestIdFilter, build_logging_config, request_id_var


def test_request_id_is_echoed(client):
    response = client.get("/api/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"


def test_request_id_is_generated(client):
    first = client.get("/api/health").headers["X-Request-ID"]
    second = client.get("/api/health").headers["X-Request-ID"]
    assert first and second and first != second


def test_security_headers(client):
    response = client.get("/")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_filter_reads_current_request_id():
    record = logging.LogRecord("storyhub", logging.INFO, __file__, 1, "hello", None, None)
    token = request_id_var.set("abc")
    try:
        RequestIdFilter().filter(record)
    finally:
        request_id_var.reset(token)
    assert record.request_id == "abc"

    RequestIdFilter().filter(record)
    assert record.request_id == "-"


def test_file_handlers_follow_log_file():
    config = build_logging_config("INFO", "logs/storyhub.log")
    assert config["handlers"]["error_file"]["filename"] == "logs/storyhub_errors.log"

    console_only = build_logging_config("INFO", "")
    assert list(console_only["handlers"]) == ["console"]
    assert console_only["loggers"]["uvicorn.access"]["handlers"] == ["console"]
