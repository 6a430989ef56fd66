"""Tests for logging setup."""

import json
import logging

import pytest

from movie_pathways.config import ObservabilityConfig
from movie_pathways.observability import (
    PACKAGE_LOGGER,
    ExtraFormatter,
    JSONFormatter,
    configure_logging,
)


def _record(**extra):
    record = logging.LogRecord(
        "movie_pathways.test", logging.INFO, __file__, 1, "Itineraries planned", (), None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_extra_formatter_appends_fields():
    text = ExtraFormatter("%(levelname)s %(message)s").format(_record(results=3, best_score=7))
    assert text == "INFO Itineraries planned | best_score=7 results=3"


def test_extra_formatter_without_extra():
    assert ExtraFormatter("%(message)s").format(_record()) == "Itineraries planned"


def test_json_formatter():
    payload = json.loads(JSONFormatter().format(_record(results=3)))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "movie_pathways.test"
    assert payload["message"] == "Itineraries planned"
    assert payload["results"] == 3


def test_configure_logging_replaces_handler(package_logger):
    configure_logging(ObservabilityConfig(level="debug"))
    configure_logging(ObservabilityConfig(structured=True))

    ours = [h for h in package_logger.handlers if getattr(h, "_movie_pathways", False)]
    assert len(ours) == 1
    assert isinstance(ours[0].formatter, JSONFormatter)
    assert package_logger.level == logging.INFO
