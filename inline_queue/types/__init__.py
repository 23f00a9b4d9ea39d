"""
Type definitions for the inline queue.
"""

from inline_queue.types.job import (
    JobClass,
    JobRecord,
    class_name,
    class_path,
)

__all__ = [
    "JobClass",
    "JobRecord",
    "class_name",
    "class_path",
]
