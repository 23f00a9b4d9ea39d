"""
Job-related type definitions for internal use.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Protocol

from pydantic import ImportString, TypeAdapter, ValidationError

from inline_queue.errors import JobResolutionError

_import_adapter: TypeAdapter[Any] = TypeAdapter(ImportString)


class JobClass(Protocol):
    """
    Contract a job class must satisfy.

    ``queue`` may be a plain string or a zero-argument callable returning one.
    Lifecycle hooks are optional and discovered by name prefix, see
    ``inline_queue.constants.HookKind``.
    """

    queue: ClassVar[Any]

    @classmethod
    def perform(cls, *args: Any) -> Any: ...


def class_path(job_class: type | str) -> str:
    """Dotted import path identifying a job class."""
    if isinstance(job_class, str):
        return job_class
    return f"{job_class.__module__}.{job_class.__qualname__}"


def class_name(job_class: type | str) -> str:
    """Short class name used in assertion messages."""
    return class_path(job_class).rsplit(".", 1)[-1]


@dataclass(frozen=True)
class JobRecord:
    """
    A queued unit of work.

    Args are stored already normalized. ``job_class`` is either the class
    itself or, for directly inserted records, its dotted import path.
    """

    job_class: type | str
    args: tuple[Any, ...] = ()

    @property
    def class_path(self) -> str:
        return class_path(self.job_class)

    @property
    def class_name(self) -> str:
        return class_name(self.job_class)

    def matches(self, job_class: type | str, args: list[Any] | None = None) -> bool:
        """
        Check whether this record belongs to ``job_class``.

        ``args`` must already be normalized; None matches any arguments.
        """
        if self.class_path != class_path(job_class):
            return False
        return args is None or list(self.args) == list(args)

    def resolve_class(self) -> type:
        """Return the job class, importing it when stored as a path."""
        if not isinstance(self.job_class, str):
            return self.job_class
        try:
            return _import_adapter.validate_python(self.job_class)
        except ValidationError as e:
            raise JobResolutionError(self.job_class, str(e.errors()[0]["msg"])) from e

    def as_dict(self) -> dict[str, Any]:
        return {"class": self.class_path, "args": list(self.args)}

    def __repr__(self) -> str:
        return repr(self.as_dict())
