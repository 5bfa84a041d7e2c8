"""Shared pytest fixtures for flyfit-coordination tests."""

import asyncio
from typing import Any, Awaitable, Callable

import pytest
from prometheus_client import CollectorRegistry

from flyfit_coordination.metrics import MetricsCollector


@pytest.fixture(scope="function")
def metrics_collector() -> MetricsCollector:
    """Metrics collector on an isolated registry."""
    return MetricsCollector(registry=CollectorRegistry())


@pytest.fixture(scope="function")
def timeline() -> list:
    """Shared list operations append start/end markers to."""
    return []


@pytest.fixture(scope="function")
def make_operation(timeline: list) -> Callable[..., Callable[[], Awaitable[Any]]]:
    """Factory for zero-argument operations that record when they run."""

    def factory(value: Any, delay: float = 0.0, error: Exception = None):
        async def operation() -> Any:
            timeline.append(("start", value))
            await asyncio.sleep(delay)
            timeline.append(("end", value))
            if error is not None:
                raise error
            return value

        return operation

    return factory


@pytest.fixture(scope="function")
def read_sample(metrics_collector: MetricsCollector) -> Callable[[str, dict], float]:
    """Read a sample from the isolated registry, treating missing samples as 0."""

    def reader(name: str, labels: dict) -> float:
        value = metrics_collector.registry.get_sample_value(name, labels)
        return value if value is not None else 0.0

    return reader
