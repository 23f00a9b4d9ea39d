"""
Inline Job Queue

An in-process, synchronous stand-in for a multi-queue background job system.
Lets test code enqueue work, assert on queue contents and execute jobs
deterministically without a broker or a worker process.
"""

__version__ = "1.0.0"

from inline_queue.assertions import (  # noqa: E402
    QueueAssertions,
    assert_not_queued,
    assert_nothing_queued,
    assert_queued,
    assert_queues,
)
from inline_queue.errors import (  # noqa: E402
    DontPerform,
    InlineQueueError,
    JobResolutionError,
    NoQueueError,
    QueueAssertionError,
)
from inline_queue.queue import InlineQueue, get_queue  # noqa: E402
from inline_queue.types.job import JobClass, JobRecord  # noqa: E402

__all__ = [
    "__version__",
    "InlineQueue",
    "get_queue",
    "JobClass",
    "JobRecord",
    "QueueAssertions",
    "assert_queued",
    "assert_not_queued",
    "assert_queues",
    "assert_nothing_queued",
    "InlineQueueError",
    "NoQueueError",
    "JobResolutionError",
    "QueueAssertionError",
    "DontPerform",
]
