"""
Prometheus metrics collection.

Each queue instance owns its own registry so that independent instances
(one per test, typically) never collide on metric registration.
"""

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

from inline_queue.constants import (
    METRIC_JOB_DURATION,
    METRIC_JOBS_ENQUEUED,
    METRIC_JOBS_EXECUTED,
    METRIC_QUEUE_DEPTH,
)


class MetricsCollector:
    """
    Prometheus metrics collector for an inline queue.

    Collects metrics for:
    - Jobs enqueued per queue
    - Jobs executed per queue and outcome
    - Queue depth
    - Job execution duration
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        """
        Initialize the metrics collector.

        Args:
            registry: Optional registry. A private one is created if not provided.
        """
        self._registry = registry or CollectorRegistry()

        self.jobs_enqueued = Counter(
            METRIC_JOBS_ENQUEUED,
            "Total number of jobs enqueued",
            ["queue"],
            registry=self._registry,
        )

        self.jobs_executed = Counter(
            METRIC_JOBS_EXECUTED,
            "Total number of jobs executed",
            ["queue", "outcome"],
            registry=self._registry,
        )

        self.queue_depth = Gauge(
            METRIC_QUEUE_DEPTH,
            "Number of jobs waiting in the queue",
            ["queue"],
            registry=self._registry,
        )

        self.job_duration = Histogram(
            METRIC_JOB_DURATION,
            "Job execution duration in seconds",
            ["queue", "outcome"],
            buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def record_job_enqueued(self, queue: str) -> None:
        """Record a job enqueue."""
        self.jobs_enqueued.labels(queue=queue).inc()

    def record_job_executed(
        self,
        queue: str,
        outcome: str,
        duration_seconds: float,
    ) -> None:
        """Record a job execution."""
        self.jobs_executed.labels(queue=queue, outcome=outcome).inc()
        self.job_duration.labels(queue=queue, outcome=outcome).observe(
            duration_seconds
        )

    def update_queue_depth(self, queue: str, depth: int) -> None:
        """Update queue depth for a queue."""
        self.queue_depth.labels(queue=queue).set(depth)

    def get_metrics(self) -> bytes:
        """Get all metrics in Prometheus exposition format."""
        return generate_latest(self._registry)


class NullMetricsCollector:
    """Drop-in collector used when ``Settings.metrics_enabled`` is false."""

    def record_job_enqueued(self, queue: str) -> None:
        pass

    def record_job_executed(self, queue: str, outcome: str, duration_seconds: float) -> None:
        pass

    def update_queue_depth(self, queue: str, depth: int) -> None:
        pass


def setup_metrics(enabled: bool = True) -> MetricsCollector | NullMetricsCollector:
    """
    Build a metrics collector for a new queue instance.

    Args:
        enabled: When False, a collector that records nothing is returned.

    Returns:
        A metrics collector.
    """
    if not enabled:
        return NullMetricsCollector()
    return MetricsCollector()
