"""
Lifecycle hook discovery and dispatch.

A job class opts into a hook by defining methods whose names start with a
``HookKind`` prefix. Several hooks of one kind may coexist
(``before_perform``, ``before_perform_audit``, ...); they run in sorted name
order. A missing hook is never an error.

Hook signatures:
    before_enqueue*(*args) -> bool | None    return False to veto the enqueue
    after_enqueue*(*args)
    before_perform*(*args)                   may raise DontPerform
    around_perform*(proceed, *args)          call proceed() to run perform
    after_perform*(*args)                    only runs if perform ran
    on_failure*(error, *args)
"""

import logging
from collections.abc import Callable, Sequence
from functools import partial
from typing import Any

from inline_queue.constants import HookKind, JobOutcome
from inline_queue.errors import DontPerform
from inline_queue.types.job import class_name

logger = logging.getLogger(__name__)


def find_hooks(job_class: Any, kind: HookKind) -> list[Callable[..., Any]]:
    """
    Get the hooks of one kind defined on a job class.

    Args:
        job_class: The job class.
        kind: The hook kind.

    Returns:
        Bound hook callables in name order.
    """
    names = sorted(
        name
        for name in dir(job_class)
        if name == kind or name.startswith(f"{kind}_")
    )
    return [
        hook for hook in (getattr(job_class, name) for name in names) if callable(hook)
    ]


def perform_job(job_class: Any, args: Sequence[Any]) -> JobOutcome:
    """Call ``perform`` with no hooks; failures propagate unchanged."""
    job_class.perform(*args)
    return JobOutcome.PERFORMED


def perform_with_hooks(job_class: Any, args: Sequence[Any]) -> JobOutcome:
    """
    Call ``perform`` wrapped in the job class's lifecycle hooks.

    Order: before hooks, around hooks nested around perform (first hook
    outermost), then after hooks if perform actually ran. DontPerform from a
    before or around hook skips the job silently. Any other exception is
    passed to the failure hooks and re-raised.

    Args:
        job_class: The job class.
        args: Normalized job arguments.

    Returns:
        PERFORMED if perform ran, SKIPPED otherwise.
    """
    performed = False

    def run_perform() -> None:
        nonlocal performed
        job_class.perform(*args)
        performed = True

    try:
        for hook in find_hooks(job_class, HookKind.BEFORE_PERFORM):
            hook(*args)

        chain: Callable[[], Any] = run_perform
        for hook in reversed(find_hooks(job_class, HookKind.AROUND_PERFORM)):
            chain = partial(hook, chain, *args)
        chain()

        if performed:
            for hook in find_hooks(job_class, HookKind.AFTER_PERFORM):
                hook(*args)

    except DontPerform:
        logger.info("Job skipped by hook", extra={"job_class": class_name(job_class)})
        return JobOutcome.SKIPPED

    except Exception as e:
        for hook in find_hooks(job_class, HookKind.ON_FAILURE):
            hook(e, *args)
        raise

    return JobOutcome.PERFORMED if performed else JobOutcome.SKIPPED


def execute_job(job_class: Any, args: Sequence[Any], hooks_enabled: bool) -> JobOutcome:
    """
    Execute a job, with or without lifecycle hooks.

    Args:
        job_class: The resolved job class.
        args: Normalized job arguments.
        hooks_enabled: Whether lifecycle hooks fire.

    Returns:
        The job outcome.
    """
    if hooks_enabled:
        return perform_with_hooks(job_class, args)
    return perform_job(job_class, args)
