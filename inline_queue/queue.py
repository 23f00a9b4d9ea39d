"""
Inline queue facade.

Wires the queue store and the execution engine behind one object. Tests
usually build a fresh ``InlineQueue`` per scenario; ``get_queue()`` returns a
process-wide instance for code that enqueues without being handed one, and
that instance must be reset explicitly between scenarios.
"""

from typing import Any

from inline_queue.config import get_settings
from inline_queue.observability.metrics import MetricsCollector, NullMetricsCollector, setup_metrics
from inline_queue.store.queue_store import QueueStore
from inline_queue.types.job import JobRecord
from inline_queue.worker.engine import Engine

# Process-wide queue instance
_queue: "InlineQueue | None" = None


class InlineQueue:
    """
    In-process, synchronous stand-in for a background job queue.

    Jobs are plain classes exposing a ``queue`` selector and a ``perform``
    classmethod. Enqueued jobs sit in memory until one of the run methods
    executes them in the calling thread.
    """

    def __init__(
        self,
        hooks_enabled: bool | None = None,
        metrics: MetricsCollector | NullMetricsCollector | None = None,
    ):
        """
        Initialize an empty queue.

        Args:
            hooks_enabled: Initial and reset state of the hooks toggle.
                Defaults to ``Settings.hooks_enabled``.
            metrics: Metrics collector. Built from settings if not provided.
        """
        self.metrics = metrics or setup_metrics(get_settings().metrics_enabled)
        self._store = QueueStore(hooks_enabled=hooks_enabled, metrics=self.metrics)
        self._engine = Engine(self._store, self.metrics)

    # Enqueueing

    def enqueue(self, job_class: Any, *args: Any) -> bool:
        return self._store.enqueue(job_class, *args)

    def enqueue_to(self, queue_name: Any, job_class: Any, *args: Any) -> bool:
        return self._store.enqueue_to(queue_name, job_class, *args)

    def create(self, queue_name: Any, job_class: type | str, *args: Any) -> JobRecord:
        return self._store.create(queue_name, job_class, *args)

    def dequeue(self, job_class: Any, *args: Any) -> int:
        return self._store.dequeue(job_class, *args)

    # Inspection

    def queue_for(self, job_class: Any) -> str:
        return self._store.queue_for(job_class)

    def queue(self, queue_name: Any) -> tuple[JobRecord, ...]:
        return self._store.contents(queue_name)

    def queues(self) -> list[str]:
        return self._store.queue_names()

    def size(self, queue_name: Any = None) -> int:
        return self._store.size(queue_name)

    def is_empty(self) -> bool:
        return self._store.size() == 0

    # Execution

    def run(self) -> int:
        return self._engine.run()

    def run_for(self, queue_name: Any, limit: int | None = None) -> int:
        return self._engine.run_for(self._store.queue_key(queue_name), limit=limit)

    def full_run(self) -> int:
        return self._engine.full_run()

    # Lifecycle

    @property
    def hooks_enabled(self) -> bool:
        return self._store.hooks_enabled

    def enable_hooks(self) -> None:
        self._store.enable_hooks()

    def disable_hooks(self) -> None:
        self._store.disable_hooks()

    def reset(self) -> None:
        self._store.reset()


def get_queue() -> InlineQueue:
    """
    Get the process-wide queue instance.

    Returns:
        InlineQueue: The shared instance, created on first use.
    """
    global _queue
    if _queue is None:
        _queue = InlineQueue()
    return _queue
