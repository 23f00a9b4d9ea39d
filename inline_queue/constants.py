"""
Application constants.
Centralized location for all constant values used across the package.
"""

from enum import StrEnum


class HookKind(StrEnum):
    """
    Lifecycle hook name prefixes.

    A job class opts into a hook by defining one or more methods whose names
    start with the prefix, e.g. ``before_perform`` or ``before_perform_audit``.
    """

    BEFORE_ENQUEUE = "before_enqueue"
    AFTER_ENQUEUE = "after_enqueue"
    BEFORE_PERFORM = "before_perform"
    AROUND_PERFORM = "around_perform"
    AFTER_PERFORM = "after_perform"
    ON_FAILURE = "on_failure"


class JobOutcome(StrEnum):
    """
    Result of executing a single job record.

    FAILED is only ever recorded for metrics; a failed job raises instead of
    returning an outcome.
    """

    PERFORMED = "performed"
    SKIPPED = "skipped"
    FAILED = "failed"


# Queue selector attribute on job classes
QUEUE_ATTRIBUTE = "queue"

# Metrics names
METRIC_JOBS_ENQUEUED = "inline_queue_jobs_enqueued_total"
METRIC_JOBS_EXECUTED = "inline_queue_jobs_executed_total"
METRIC_QUEUE_DEPTH = "inline_queue_depth"
METRIC_JOB_DURATION = "inline_queue_job_duration_seconds"

# Trace span names
SPAN_ENQUEUE_JOB = "enqueue_job"
SPAN_EXECUTE_JOB = "execute_job"
SPAN_RUN_PASS = "run_pass"
