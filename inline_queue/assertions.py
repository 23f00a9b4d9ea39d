"""
Queue assertions.

Inspect an ``InlineQueue`` before and after an action and raise
``QueueAssertionError`` with a precise message when its state does not match.

The module-level functions operate on the process-wide queue; bind a
``QueueAssertions`` to a specific instance otherwise.
"""

import logging
from collections.abc import Callable
from typing import Any

from inline_queue.errors import QueueAssertionError
from inline_queue.queue import InlineQueue, get_queue
from inline_queue.store.normalize import normalize
from inline_queue.types.job import class_name

logger = logging.getLogger(__name__)

Action = Callable[[], Any]


class QueueAssertions:
    """Assertions over the queues of one ``InlineQueue``."""

    def __init__(self, queue: InlineQueue):
        self._queue = queue

    def assert_queued(
        self,
        job_class: Any,
        args: list[Any] | None = None,
        message: str | None = None,
    ) -> None:
        """
        Assert a job of ``job_class`` is waiting in its queue.

        Args:
            job_class: The job class.
            args: Expected arguments; any arguments match when None.
            message: Replaces the default failure message.
        """
        queue_name = self._queue.queue_for(job_class)
        if self._count(job_class, args) == 0:
            self._fail(message or self._queued_message(job_class, args, queue_name))

    def assert_not_queued(
        self,
        job_class: Any,
        args: list[Any] | None = None,
        message: str | None = None,
        action: Action | None = None,
    ) -> None:
        """
        Assert no job of ``job_class`` is waiting in its queue.

        With ``action``, only jobs queued by the action count: a matching job
        that was already waiting does not fail the assertion.

        Args:
            job_class: The job class.
            args: Expected arguments; any arguments match when None.
            message: Replaces the default failure message.
            action: Zero-argument callable the assertion is scoped to.
        """
        queue_name = self._queue.queue_for(job_class)
        before = self._count(job_class, args) if action is not None else 0
        if action is not None:
            action()

        if self._count(job_class, args) > before:
            self._fail(
                message
                or f"{self._describe(job_class, args)} should not have been queued in {queue_name}."
            )

    def assert_queues(
        self,
        job_class: Any,
        *args: Any,
        action: Action,
        message: str | None = None,
    ) -> None:
        """
        Assert ``action`` queues at least one job of ``job_class``.

        Args:
            job_class: The job class.
            *args: Expected arguments, passed positionally the way they are
                passed to enqueue(), not as one list as in assert_queued().
                ``assert_queues(Job, 1, "a", action=...)`` expects ``[1, "a"]``;
                ``assert_queues(Job, [1, "a"], action=...)`` expects a single
                list argument. Any arguments match when omitted.
            action: Zero-argument callable expected to enqueue the job.
            message: Replaces the default failure message.
        """
        expected = list(args) if args else None
        queue_name = self._queue.queue_for(job_class)
        before = self._count(job_class, expected)
        action()

        if self._count(job_class, expected) <= before:
            self._fail(message or self._queued_message(job_class, expected, queue_name))

    def assert_nothing_queued(self, action: Action, message: str | None = None) -> None:
        """
        Assert ``action`` leaves the total number of queued jobs unchanged.

        Args:
            action: Zero-argument callable.
            message: Replaces the first line of the failure message.
        """
        before = self._queue.size()
        action()
        after = self._queue.size()

        if before != after:
            headline = message or "No jobs should have been queued."
            self._fail(f"{headline}\n<{before}> expected but was\n<{after}>.")

    def _count(self, job_class: Any, args: list[Any] | None) -> int:
        expected = None if args is None else normalize(list(args))
        queue_name = self._queue.queue_for(job_class)
        return sum(
            1 for record in self._queue.queue(queue_name) if record.matches(job_class, expected)
        )

    def _queued_message(self, job_class: Any, args: list[Any] | None, queue_name: str) -> str:
        contents = list(self._queue.queue(queue_name))
        return f"{self._describe(job_class, args)} should have been queued in {queue_name}: {contents!r}."

    @staticmethod
    def _describe(job_class: Any, args: list[Any] | None) -> str:
        if args is None:
            return class_name(job_class)
        return f"{class_name(job_class)} with {args!r}"

    @staticmethod
    def _fail(message: str) -> None:
        logger.debug("Queue assertion failed", extra={"failure": message})
        raise QueueAssertionError(message)


def assert_queued(job_class: Any, args: list[Any] | None = None, message: str | None = None) -> None:
    """Assert against the process-wide queue; see ``QueueAssertions.assert_queued``."""
    QueueAssertions(get_queue()).assert_queued(job_class, args, message)


def assert_not_queued(
    job_class: Any,
    args: list[Any] | None = None,
    message: str | None = None,
    action: Action | None = None,
) -> None:
    """Assert against the process-wide queue; see ``QueueAssertions.assert_not_queued``."""
    QueueAssertions(get_queue()).assert_not_queued(job_class, args, message, action)


def assert_queues(job_class: Any, *args: Any, action: Action, message: str | None = None) -> None:
    """
    Assert against the process-wide queue; see ``QueueAssertions.assert_queues``.

    Expected arguments are given positionally, not as a list.
    """
    QueueAssertions(get_queue()).assert_queues(job_class, *args, action=action, message=message)


def assert_nothing_queued(action: Action, message: str | None = None) -> None:
    """Assert against the process-wide queue; see ``QueueAssertions.assert_nothing_queued``."""
    QueueAssertions(get_queue()).assert_nothing_queued(action, message)
