"""
Schedulers that do not need an event loop.

ImmediateScheduler runs callbacks right away (the delay is skipped).
ManualScheduler keeps a virtual clock that the caller advances, which is
what the console front end and the tests use.
"""

from typing import Callable, List

from .base import Scheduler, TaskHandle


class ImmediateScheduler(Scheduler):
    """Runs every callback synchronously inside submit()."""

    def submit(self, delay_ms: float, callback: Callable[[], None]) -> TaskHandle:
        handle = self._new_handle(delay_ms, callback)
        handle.run()
        return handle

    def cancel_all(self):
        # Nothing is ever left pending
        pass


class ManualScheduler(Scheduler):
    """
    Scheduler with a virtual clock.

    Tasks run only when advance() or run_all() is called. Tasks due at the
    same time run in submission order. A callback may submit new tasks;
    those run in the same advance() call if they fall due within it.
    """

    def __init__(self):
        super().__init__()
        self.now_ms = 0.0
        self._tasks: List[TaskHandle] = []
        self._due: dict = {}

    def submit(self, delay_ms: float, callback: Callable[[], None]) -> TaskHandle:
        handle = self._new_handle(delay_ms, callback)
        self._tasks.append(handle)
        self._due[handle.task_id] = self.now_ms + max(delay_ms, 0)
        return handle

    def cancel_all(self):
        for handle in self._tasks:
            handle.cancel()
        self._tasks.clear()
        self._due.clear()

    @property
    def pending_count(self) -> int:
        return len(self._tasks)

    def _pop_next_due(self, until_ms: float):
        if not self._tasks:
            return None
        handle = min(self._tasks, key=lambda h: (self._due[h.task_id], h.task_id))
        if self._due[handle.task_id] > until_ms:
            return None
        self._tasks.remove(handle)
        return handle, self._due.pop(handle.task_id)

    def advance(self, ms: float) -> int:
        """
        Move the clock forward and run every task that falls due.

        Args:
            ms: How far to move the clock.

        Returns:
            Number of tasks that ran.
        """
        target = self.now_ms + ms
        ran = 0
        while True:
            item = self._pop_next_due(target)
            if item is None:
                break
            handle, due = item
            self.now_ms = max(self.now_ms, due)
            handle.run()
            ran += 1
        self.now_ms = target
        return ran

    def run_all(self, max_tasks: int = 1000) -> int:
        """
        Run tasks in due order until none are left.

        Args:
            max_tasks: Safety limit against callbacks that keep rescheduling.

        Returns:
            Number of tasks that ran.
        """
        ran = 0
        while self._tasks:
            if ran >= max_tasks:
                raise RuntimeError(f"Still {len(self._tasks)} tasks pending after {max_tasks} runs")
            handle, due = self._pop_next_due(float("inf"))
            self.now_ms = max(self.now_ms, due)
            handle.run()
            ran += 1
        return ran
