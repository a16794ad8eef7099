"""Configuration file for pytest containing fixtures and configuration.

This module provides fixtures that can be used across multiple test files:
- parse_query: parses GraphQL source into a graphql-core document
- log_capture: collects loguru records emitted during a test
"""

from collections.abc import Callable

import pytest
from graphql import parse
from graphql.language import DocumentNode
from loguru import logger


@pytest.fixture(scope="session")
def parse_query() -> Callable[[str], DocumentNode]:
    """Fixture returning graphql-core's parser."""
    return parse


@pytest.fixture
def log_capture():
    """Fixture to capture loguru logs."""
    captured_logs: list[dict] = []

    def sink(message):
        record = message.record
        captured_logs.append({
            "level": record["level"].name,
            "message": record["message"],
            "extra": dict(record["extra"]),
        })

    handler_id = logger.add(sink, level="DEBUG", format="{message}")
    yield captured_logs
    logger.remove(handler_id)
