"""Tests for structlog setup."""

import logging
from logging.handlers import TimedRotatingFileHandler

import structlog

from sseframe.logging_config import setup_logging


class TestSetupLogging:
    def test_repeated_calls_replace_handlers(self, tmp_path):
        root = logging.getLogger()
        try:
            setup_logging(None, "WARNING")
            baseline = len(root.handlers)
            setup_logging(str(tmp_path), "WARNING")
            assert len(root.handlers) == baseline + 1
            setup_logging(str(tmp_path), "WARNING")
            assert len(root.handlers) == baseline + 1
            rotating = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]
            assert len(rotating) == 1
        finally:
            setup_logging(None, "WARNING")

    def test_structured_events_go_through_rotating_file(self, tmp_path, capsys):
        try:
            setup_logging(str(tmp_path), "INFO")
            structlog.get_logger().info("file_check", answer=42)
            content = (tmp_path / "sseframe.jsonl").read_text()
            assert '"event": "file_check"' in content
            assert '"answer": 42' in content
            assert "file_check" in capsys.readouterr().err
        finally:
            setup_logging(None, "WARNING")
