"""
Inline queue exceptions.

Two of these deliberately sit outside the ``InlineQueueError`` tree:

- QueueAssertionError subclasses AssertionError so test runners report it as
  an ordinary assertion failure.
- DontPerform subclasses BaseException so ``except Exception`` blocks in job
  code or in the engine never mistake it for a failure.
"""

from typing import Any


class InlineQueueError(Exception):
    """Base exception for all inline queue errors."""
    pass


class NoQueueError(InlineQueueError):
    """Raised when a job class does not resolve to a queue name."""

    def __init__(self, job_class: Any):
        self.job_class = job_class
        name = getattr(job_class, "__name__", job_class)
        super().__init__(f"Jobs must be placed onto a queue: {name} has no queue")


class JobResolutionError(InlineQueueError):
    """Raised when a job record references a class path that cannot be imported."""

    def __init__(self, class_path: str, reason: str):
        self.class_path = class_path
        super().__init__(f"Cannot resolve job class {class_path!r}: {reason}")


class QueueAssertionError(AssertionError):
    """Raised by the assertion layer when queue state does not match."""
    pass


class DontPerform(BaseException):
    """
    Signal raised from a before/around hook to skip ``perform``.

    This is not a failure: the job is dropped, no after or failure hooks run
    and nothing propagates out of the engine.
    """
    pass
