# Tests for JSON logging and source binding

import json
import logging

import pytest

from microstock_studio.logging_config import (
    JsonFormatter,
    bind_source,
    configure_logging,
    get_source,
)


def _record(msg: str = "hello %s", args=("world",), **extra) -> logging.LogRecord:
    record = logging.LogRecord("microstock_studio.test", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestBindSource:
    def test_bound_inside_block_only(self):
        assert get_source() == ""
        with bind_source("batch.json#3"):
            assert get_source() == "batch.json#3"
        assert get_source() == ""

    def test_nested(self):
        with bind_source("a"):
            with bind_source("b"):
                assert get_source() == "b"
            assert get_source() == "a"


class TestJsonFormatter:
    def test_standard_fields(self):
        payload = json.loads(JsonFormatter().format(_record()))
        assert payload["level"] == "INFO"
        assert payload["logger"] == "microstock_studio.test"
        assert payload["message"] == "hello world"
        assert "source" not in payload
        assert "lineno" not in payload

    def test_source_and_extra(self):
        with bind_source("sheet.csv:row 2"):
            payload = json.loads(JsonFormatter().format(_record(score=68)))
        assert payload["source"] == "sheet.csv:row 2"
        assert payload["score"] == 68


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_single_json_handler(self):
        configure_logging("debug")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_plain_format(self):
        configure_logging("WARNING", json_format=False)
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_unknown_level_falls_back_to_info(self):
        configure_logging("chatty")
        assert logging.getLogger().level == logging.INFO
