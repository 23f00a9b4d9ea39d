"""
Pytest configuration and shared fixtures.
"""

import os
from collections.abc import Generator

import pytest

from inline_queue import InlineQueue, QueueAssertions, get_queue
from inline_queue.config import Settings, get_settings
from inline_queue.observability.metrics import MetricsCollector
from tests.jobs import reset_job_state

# Keep developer .env files and shell variables from leaking into tests
for _name in list(os.environ):
    if _name.startswith("INLINE_QUEUE_"):
        del os.environ[_name]


@pytest.fixture(autouse=True)
def clean_state() -> Generator[None]:
    """Reset the process-wide queue and job class flags around every test."""
    get_settings.cache_clear()
    get_queue().reset()
    reset_job_state()

    yield

    get_queue().reset()
    reset_job_state()


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        hooks_enabled=False,
        metrics_enabled=True,
        log_level="DEBUG",
        log_format="console",
    )


@pytest.fixture
def metrics() -> MetricsCollector:
    """A collector with its own registry."""
    return MetricsCollector()


@pytest.fixture
def queue(metrics: MetricsCollector) -> InlineQueue:
    """A fresh queue instance with hooks disabled."""
    return InlineQueue(hooks_enabled=False, metrics=metrics)


@pytest.fixture
def assertions(queue: InlineQueue) -> QueueAssertions:
    """Assertions bound to the ``queue`` fixture."""
    return QueueAssertions(queue)


@pytest.fixture
def shared_queue(clean_state: None) -> InlineQueue:
    """The process-wide queue, reset by ``clean_state``."""
    return get_queue()
