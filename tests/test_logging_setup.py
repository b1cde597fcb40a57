"""Tests for logging configuration."""

import json
import logging
import sys

import pytest

from sedcluster.utils.logging_setup import JSONFormatter, log_operation, setup_logging


@pytest.fixture
def logger_name():
    name = "sedcluster.test_logging"
    yield name
    logger = logging.getLogger(name)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_setup_console_only(logger_name):
    logger = setup_logging(logger_name, level="DEBUG")
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert len(logger.handlers) == 1


def test_setup_is_idempotent(logger_name):
    setup_logging(logger_name)
    logger = setup_logging(logger_name)
    assert len(logger.handlers) == 1


def test_json_file_output(logger_name, tmp_path):
    logger = setup_logging(logger_name, console=False, file=True, log_dir=tmp_path)
    log_operation(logger, "compute_distances", pairs=3)
    for handler in logger.handlers:
        handler.flush()

    files = list(tmp_path.glob("sedcluster_*.jsonl"))
    assert len(files) == 1
    record = json.loads(files[0].read_text().splitlines()[0])
    assert record["operation"] == "compute_distances"
    assert record["pairs"] == 3
    assert record["level"] == "INFO"


def test_json_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None,
                                   exc_info=sys.exc_info())
    payload = json.loads(JSONFormatter().format(record))
    assert payload["message"] == "failed"
    assert "boom" in payload["exception"]
