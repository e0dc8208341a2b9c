"""
Tests pour le système de logging avec sessions et création lazy.
"""

import logging
from pathlib import Path

from caption_translator.logger import (
    LazyFileHandler,
    LogSession,
    get_logger,
    get_session_log_path,
)


def make_record(message):
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=message,
        args=(),
        exc_info=None,
    )


def test_log_session_singleton():
    assert LogSession() is LogSession()
    assert LogSession.get_session_dir() == LogSession.get_session_dir()


def test_session_dir_under_base_dir(tmp_path):
    session_dir = LogSession.get_session_dir()

    assert session_dir.name.startswith("run_")
    assert session_dir.parent == tmp_path / "logs"


def test_lazy_file_handler_creates_file_only_on_emit(tmp_path):
    log_file = tmp_path / "lazy" / "test.log"
    handler = LazyFileHandler(log_file, mode="w")
    handler.setFormatter(logging.Formatter("%(message)s"))

    assert not log_file.exists()

    handler.emit(make_record("Test message"))
    handler.close()

    assert log_file.read_text(encoding="utf-8").strip() == "Test message"


def test_get_logger_writes_in_current_session():
    logger = get_logger("caption_translator.tests.session", "session_test.log")
    logger.warning("Message de session")

    log_path = get_session_log_path("session_test.log")
    assert log_path.exists()
    assert "Message de session" in log_path.read_text(encoding="utf-8")


def test_get_logger_reuses_handlers():
    first = get_logger("caption_translator.tests.reuse")
    second = get_logger("caption_translator.tests.reuse")

    assert first is second
    assert len(first.handlers) == 2
