"""
In-memory queue store.
Owns every queue and the records waiting in them.
"""

import copy
import logging
from collections import deque
from typing import Any

from inline_queue.config import get_settings
from inline_queue.constants import QUEUE_ATTRIBUTE, SPAN_ENQUEUE_JOB, HookKind
from inline_queue.errors import NoQueueError
from inline_queue.observability.metrics import MetricsCollector, NullMetricsCollector, setup_metrics
from inline_queue.observability.tracing import create_span
from inline_queue.store.normalize import normalize, normalize_args
from inline_queue.types.job import JobRecord, class_name, class_path
from inline_queue.worker.hooks import find_hooks

logger = logging.getLogger(__name__)


class QueueStore:
    """
    Named FIFO queues of job records.

    Implements:
    - Queue resolution from the job class
    - Enqueue with argument normalization and enqueue hooks
    - Head pops for the execution engine
    - Read-only views for assertions

    An absent queue and an empty queue are indistinguishable: both report a
    size of zero and no contents.
    """

    def __init__(
        self,
        hooks_enabled: bool | None = None,
        metrics: MetricsCollector | NullMetricsCollector | None = None,
    ):
        """
        Initialize an empty store.

        Args:
            hooks_enabled: Default state of the hooks toggle, restored by
                reset(). Defaults to ``Settings.hooks_enabled``.
            metrics: Metrics collector. Built from settings if not provided.
        """
        settings = get_settings()

        self._default_hooks_enabled = (
            settings.hooks_enabled if hooks_enabled is None else hooks_enabled
        )
        self._hooks_enabled = self._default_hooks_enabled
        self._queues: dict[str, deque[JobRecord]] = {}
        self._metrics = metrics or setup_metrics(settings.metrics_enabled)

    # ------------------------------------------------------------------
    # Hooks toggle
    # ------------------------------------------------------------------

    @property
    def hooks_enabled(self) -> bool:
        return self._hooks_enabled

    def enable_hooks(self) -> None:
        self._hooks_enabled = True

    def disable_hooks(self) -> None:
        self._hooks_enabled = False

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def queue_for(self, job_class: Any) -> str:
        """
        Resolve the queue a job class is placed on.

        Raises:
            NoQueueError: If the class has no queue, or it resolves to nothing.
        """
        selector = getattr(job_class, QUEUE_ATTRIBUTE, None)
        queue_name = selector() if callable(selector) else selector
        if not queue_name:
            raise NoQueueError(job_class)
        return self.queue_key(queue_name)

    def enqueue(self, job_class: Any, *args: Any) -> bool:
        """
        Append a job to the queue its class selects.

        Args:
            job_class: The job class.
            *args: Arguments later passed to ``perform``.

        Returns:
            True once stored; False if a ``before_enqueue`` hook vetoed it.

        Raises:
            NoQueueError: If the class does not resolve to a queue.
        """
        return self.enqueue_to(self.queue_for(job_class), job_class, *args)

    def enqueue_to(self, queue_name: Any, job_class: Any, *args: Any) -> bool:
        """Append a job to an explicit queue; same semantics as enqueue()."""
        queue_name = self.queue_key(queue_name)

        with create_span(SPAN_ENQUEUE_JOB, queue=queue_name, job_class=class_path(job_class)):
            if self._hooks_enabled:
                vetoed = [
                    hook.__name__
                    for hook in find_hooks(job_class, HookKind.BEFORE_ENQUEUE)
                    if hook(*args) is False
                ]
                if vetoed:
                    logger.info(
                        "Enqueue vetoed by hook",
                        extra={"queue": queue_name, "job_class": class_name(job_class), "hooks": vetoed},
                    )
                    return False

            self._append(queue_name, JobRecord(job_class, normalize_args(args)))

            if self._hooks_enabled:
                for hook in find_hooks(job_class, HookKind.AFTER_ENQUEUE):
                    hook(*args)

        return True

    def create(self, queue_name: Any, job_class: type | str, *args: Any) -> JobRecord:
        """
        Insert a record directly, bypassing queue resolution and enqueue hooks.

        ``job_class`` may be a class or a dotted import path resolved when the
        job runs.
        """
        record = JobRecord(job_class, normalize_args(args))
        self._append(self.queue_key(queue_name), record)
        return copy.deepcopy(record)

    def dequeue(self, job_class: Any, *args: Any) -> int:
        """
        Remove queued jobs of a class from its queue.

        Args:
            job_class: The job class.
            *args: If given, only records with these (normalized) args are removed.

        Returns:
            Number of records removed.
        """
        queue_name = self.queue_for(job_class)
        expected = list(normalize_args(args)) if args else None
        records = self._queues.get(queue_name)
        if not records:
            return 0

        kept = deque(record for record in records if not record.matches(job_class, expected))
        removed = len(records) - len(kept)
        self._store(queue_name, kept)

        logger.debug(
            "Jobs dequeued",
            extra={"queue": queue_name, "job_class": class_name(job_class), "removed": removed},
        )
        return removed

    def pop(self, queue_name: Any) -> JobRecord | None:
        """Remove and return the head record, or None if the queue is empty."""
        queue_name = self.queue_key(queue_name)
        records = self._queues.get(queue_name)
        if not records:
            return None

        record = records.popleft()
        self._store(queue_name, records)
        return record

    def reset(self) -> None:
        """Clear every queue and restore the hooks toggle to its default."""
        for queue_name in self._queues:
            self._metrics.update_queue_depth(queue_name, 0)
        self._queues.clear()
        self._hooks_enabled = self._default_hooks_enabled

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def size(self, queue_name: Any = None) -> int:
        """Records in one queue, or across all queues when no name is given."""
        if queue_name is None:
            return sum(len(records) for records in self._queues.values())
        return len(self._queues.get(self.queue_key(queue_name), ()))

    def contents(self, queue_name: Any) -> tuple[JobRecord, ...]:
        """Snapshot of a queue, head first. Records are copies of the stored ones."""
        return copy.deepcopy(tuple(self._queues.get(self.queue_key(queue_name), ())))

    def queue_names(self) -> list[str]:
        """Names of the non-empty queues in creation order."""
        return list(self._queues)

    @staticmethod
    def queue_key(queue_name: Any) -> str:
        """Canonical string key for a queue name."""
        return str(normalize(queue_name))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _append(self, queue_name: str, record: JobRecord) -> None:
        records = self._queues.setdefault(queue_name, deque())
        records.append(record)

        self._metrics.record_job_enqueued(queue_name)
        self._metrics.update_queue_depth(queue_name, len(records))
        logger.debug(
            "Job enqueued",
            extra={"queue": queue_name, "job_class": record.class_name, "depth": len(records)},
        )

    def _store(self, queue_name: str, records: deque[JobRecord]) -> None:
        if records:
            self._queues[queue_name] = records
        else:
            self._queues.pop(queue_name, None)
        self._metrics.update_queue_depth(queue_name, len(records))
