import logging

from core.error_handler import StructuredLogger


def test_structured_logger_redacts_credentials_and_candidate_data():
    logger = StructuredLogger("tests")

    # placeholder values, not real credentials
    data = {
        "dify_api_key": "app-placeholder",  # pragma: allowlist secret
        "resume_text": "张三 13800000000",
        "email": "me@example.com",
        "job_selection": "互联网：算法工程师",
    }
    sanitized = logger._sanitize_data(data)

    assert sanitized["dify_api_key"] == "[REDACTED]"
    assert sanitized["resume_text"] == "[REDACTED]"
    assert sanitized["email"] == "[REDACTED]"
    assert sanitized["job_selection"] == "互联网：算法工程师"


def test_structured_logger_redacts_nested_values():
    logger = StructuredLogger("tests")

    sanitized = logger._sanitize_data(
        {"request": {"inputs": {"CV": "file-1", "query": "q"}}, "items": [{"phone": 1}]}
    )

    assert sanitized["request"]["inputs"] == {"CV": "[REDACTED]", "query": "q"}
    assert sanitized["items"] == [{"phone": "[REDACTED]"}]


def test_log_line_carries_correlation_id(caplog):
    logger = StructuredLogger("tests.structured")

    with caplog.at_level("INFO", logger="tests.structured"):
        logger.info("Workflow call finished", api_key="app-secret", events=3)

    record = caplog.records[-1]
    assert record.structured_data["api_key"] == "[REDACTED]"
    assert record.structured_data["events"] == 3
    assert record.structured_data["correlation_id"] in record.getMessage()


def test_exception_logs_at_error_level_with_traceback(caplog):
    logger = StructuredLogger("tests.structured")

    with caplog.at_level("INFO", logger="tests.structured"):
        try:
            raise RuntimeError("upload failed")
        except RuntimeError:
            logger.exception("Resume upload failed", cv="file-1")

    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert record.exc_info is not None
    assert record.structured_data["cv"] == "[REDACTED]"
