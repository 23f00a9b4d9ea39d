"""
Synchronous execution engine.

Pops records from the queue store and executes them in the calling thread.
There is no polling, no leasing and no retry: a failing job aborts the run
call it happens in and every record not yet reached stays queued.
"""

import logging
import time

from inline_queue.constants import SPAN_EXECUTE_JOB, SPAN_RUN_PASS, JobOutcome
from inline_queue.observability.metrics import MetricsCollector, NullMetricsCollector
from inline_queue.observability.tracing import create_span
from inline_queue.store.queue_store import QueueStore
from inline_queue.types.job import JobRecord
from inline_queue.worker.hooks import execute_job

logger = logging.getLogger(__name__)


class Engine:
    """
    Drains a queue store under one of three run policies.

    - run(): one pass over every queue
    - run_for(): one pass over a single queue
    - full_run(): passes until every queue is empty

    A pass executes exactly the records present when it started; jobs
    enqueued by running jobs wait for the next pass.
    """

    def __init__(self, store: QueueStore, metrics: MetricsCollector | NullMetricsCollector):
        """
        Initialize the engine.

        Args:
            store: The queue store to drain.
            metrics: Collector recording job executions.
        """
        self._store = store
        self._metrics = metrics

    def run(self) -> int:
        """
        Execute one pass over every queue.

        Queue sizes are snapshotted up front; each queue is drained to its
        snapshot before the next queue is visited.

        Returns:
            Number of jobs executed.
        """
        backlog = {name: self._store.size(name) for name in self._store.queue_names()}

        with create_span(SPAN_RUN_PASS, queues=",".join(backlog)):
            executed = sum(self._drain(name, count) for name, count in backlog.items())

        logger.debug("Run pass finished", extra={"executed": executed, "remaining": self._store.size()})
        return executed

    def run_for(self, queue_name: str, limit: int | None = None) -> int:
        """
        Execute one pass over a single queue; other queues are untouched.

        Args:
            queue_name: The queue to drain.
            limit: Maximum number of jobs to execute.

        Returns:
            Number of jobs executed.
        """
        count = self._store.size(queue_name)
        if limit is not None:
            count = min(count, limit)

        with create_span(SPAN_RUN_PASS, queues=queue_name):
            return self._drain(queue_name, count)

    def full_run(self) -> int:
        """
        Execute passes until every queue is empty.

        Jobs enqueued by executed jobs are picked up by later passes. The
        caller's job graph must be finite or this never returns.

        Returns:
            Number of jobs executed across all passes.
        """
        executed = 0
        passes = 0
        while self._store.size() > 0:
            executed += self.run()
            passes += 1

        logger.info("Full run finished", extra={"executed": executed, "passes": passes})
        return executed

    def _drain(self, queue_name: str, count: int) -> int:
        executed = 0
        for _ in range(count):
            record = self._store.pop(queue_name)
            if record is None:
                break
            self._execute(queue_name, record)
            executed += 1
        return executed

    def _execute(self, queue_name: str, record: JobRecord) -> JobOutcome:
        start_time = time.perf_counter()
        hooks_enabled = self._store.hooks_enabled

        with create_span(SPAN_EXECUTE_JOB, queue=queue_name, job_class=record.class_path):
            try:
                outcome = execute_job(record.resolve_class(), record.args, hooks_enabled)
            except Exception as e:
                self._metrics.record_job_executed(
                    queue_name, JobOutcome.FAILED, time.perf_counter() - start_time
                )
                logger.warning(
                    "Job failed",
                    extra={
                        "queue": queue_name,
                        "job_class": record.class_name,
                        "error": f"{type(e).__name__}: {e}",
                    },
                )
                raise

        self._metrics.record_job_executed(queue_name, outcome, time.perf_counter() - start_time)
        logger.debug(
            "Job executed",
            extra={"queue": queue_name, "job_class": record.class_name, "outcome": outcome},
        )
        return outcome
