"""
Queue storage module.
Contains argument normalization and the in-memory queue store.
"""

from inline_queue.store.normalize import normalize, normalize_args
from inline_queue.store.queue_store import QueueStore

__all__ = [
    "normalize",
    "normalize_args",
    "QueueStore",
]
