"""Counting suspended tasks."""

from __future__ import annotations

import threading
from collections.abc import Hashable, Iterable
from itertools import islice

TASK_LIST_LIMIT = 200


class SuspendedTaskCounter:
    """Counts task faults reported by a task watchdog."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._count = 0

    def task_fault(self, thread_id: Hashable = None) -> None:
        """Record that a task has faulted and been suspended."""
        with self._lock:
            self._count += 1

    def suspended(self) -> int:
        """Number of faults recorded so far."""
        with self._lock:
            return self._count


def count_suspended(suspended_flags: Iterable[bool], limit: int = TASK_LIST_LIMIT) -> int:
    """Count suspended tasks among the first ``limit`` entries of a task list."""
    return sum(1 for flag in islice(suspended_flags, max(limit, 0)) if flag)