import logging

import structlog

from app.core.logging import configure_logging, get_logger


def test_configure_logging_json(caplog):
    caplog.set_level(logging.INFO)
    configure_logging(json=True, level="INFO")
    try:
        get_logger("tests").info("student.created", student_id="S-1")
    finally:
        structlog.reset_defaults()

    assert '"event": "student.created"' in caplog.text
    assert '"student_id": "S-1"' in caplog.text


def test_get_logger_without_name():
    log = get_logger()
    assert hasattr(log, "info")
