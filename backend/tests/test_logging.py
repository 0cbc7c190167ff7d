"""
Test Logging Configuration

Unit tests for component-bound loguru loggers.
"""

import pytest
from loguru import logger

from config import Settings
from core.logging_config import analysis_logger, get_logger, setup_logging


@pytest.fixture
def records():
    captured = []
    handler_id = logger.add(lambda message: captured.append(message.record), level="DEBUG")
    yield captured
    logger.remove(handler_id)


class TestComponentLoggers:
    def test_bound_component(self, records):
        get_logger("classifier").info("classified")

        assert records[-1]["extra"]["component"] == "classifier"
        assert records[-1]["message"] == "classified"

    def test_default_component(self, records):
        logger.info("plain")

        assert records[-1]["extra"]["component"] == "app"

    def test_preconfigured_logger(self, records):
        analysis_logger.success("done")

        assert records[-1]["extra"]["component"] == "analysis"
        assert records[-1]["level"].name == "SUCCESS"


def test_file_sink(tmp_path):
    log_file = tmp_path / "analyzer.log"
    setup_logging(Settings(log_file=str(log_file)))
    try:
        get_logger("projects").warning("saved")
    finally:
        setup_logging(Settings())

    assert "projects" in log_file.read_text(encoding="utf-8")
    assert "saved" in log_file.read_text(encoding="utf-8")
