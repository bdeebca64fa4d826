"""
Scheduler interface.

The game controller never waits itself: when the AI is to move it hands a
callback to a Scheduler, which runs it after a delay.
"""

from abc import ABC, abstractmethod
from typing import Callable
from dataclasses import dataclass


@dataclass
class TaskHandle:
    """A callback submitted to a scheduler."""
    task_id: int
    delay_ms: float
    callback: Callable[[], None]
    cancelled: bool = False
    done: bool = False

    @property
    def pending(self) -> bool:
        """True until the task has run or been cancelled."""
        return not (self.cancelled or self.done)

    def cancel(self):
        if not self.done:
            self.cancelled = True

    def run(self):
        """Run the callback once, unless cancelled."""
        if not self.pending:
            return
        self.done = True
        self.callback()


class Scheduler(ABC):
    """
    Runs delayed callbacks.

    Implementations must run callbacks on the thread that owns the game
    (or serialize them with it), and cancel_all must guarantee that no
    previously submitted callback runs afterwards.
    """

    def __init__(self):
        self._next_id = 0

    def _new_handle(self, delay_ms: float, callback: Callable[[], None]) -> TaskHandle:
        self._next_id += 1
        return TaskHandle(self._next_id, delay_ms, callback)

    @abstractmethod
    def submit(self, delay_ms: float, callback: Callable[[], None]) -> TaskHandle:
        """
        Schedule a callback.

        Args:
            delay_ms: Delay in milliseconds.
            callback: Called with no arguments.

        Returns:
            A handle for the task.
        """

    @abstractmethod
    def cancel_all(self):
        """Cancel every pending task."""

    @property
    def pending_count(self) -> int:
        return 0
