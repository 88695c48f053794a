"""Tests for structured logging."""

import json
import logging

import pytest

from quoteprompts.logging_config import get_logger, log_event, setup_logging


@pytest.fixture
def file_logger(tmp_path):
    setup_logging(level=logging.DEBUG, log_to_console=False, log_dir=tmp_path)
    return tmp_path


def _entries(log_dir):
    files = list(log_dir.glob("quoteprompts_*.jsonl"))
    assert len(files) == 1
    return [json.loads(line) for line in files[0].read_text(encoding="utf-8").splitlines()]


class TestLogging:
    """Tests for logger naming and the JSONL handler."""

    def test_logger_names(self):
        assert get_logger().name == "quoteprompts"
        assert get_logger("extractor").name == "quoteprompts.extractor"
        assert get_logger("quoteprompts.api").name == "quoteprompts.api"

    def test_log_event_writes_jsonl(self, file_logger):
        log_event("pricing_request", "priced", product="p1", status=200)

        entry = _entries(file_logger)[-1]
        assert entry["event"] == "pricing_request"
        assert entry["msg"] == "priced"
        assert entry["data"] == {"product": "p1", "status": 200}
        assert entry["logger"] == "quoteprompts"
        assert entry["level"] == "INFO"

    def test_plain_records_have_no_event(self, file_logger):
        get_logger("visibility").warning("deep condition")
        entry = _entries(file_logger)[-1]
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "quoteprompts.visibility"
        assert "event" not in entry
        assert "data" not in entry

    def test_exceptions_are_recorded(self, file_logger):
        try:
            raise ValueError("bad payload")
        except ValueError:
            get_logger("api").exception("pricing failed")
        entry = _entries(file_logger)[-1]
        assert entry["level"] == "ERROR"
        assert "ValueError: bad payload" in entry["error"]

    def test_level_threshold(self, tmp_path):
        setup_logging(level=logging.WARNING, log_to_console=False, log_dir=tmp_path)
        log_event("prompt_source", "ignored", level=logging.DEBUG, path="prompts")
        get_logger().warning("kept")
        assert [e["msg"] for e in _entries(tmp_path)] == ["kept"]

    def test_prompt_source_event(self, file_logger, easyquote_product):
        from quoteprompts.extractor import extract_prompts

        extract_prompts(easyquote_product)
        entry = _entries(file_logger)[-1]
        assert entry["event"] == "prompt_source"
        assert entry["logger"] == "quoteprompts.extractor"
        assert entry["data"] == {"path": "prompts", "count": 4}
