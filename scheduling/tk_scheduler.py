"""
Scheduler bound to the Tkinter event loop.
"""

import logging
from typing import Callable, Dict, Tuple

from .base import Scheduler, TaskHandle

logger = logging.getLogger(__name__)


class TkScheduler(Scheduler):
    """
    Runs callbacks with root.after() on the Tk main loop.

    Callbacks always run on the UI thread, so they are serialized with
    button clicks.
    """

    def __init__(self, root):
        """
        Args:
            root: The tk.Tk (or any widget) whose after() is used.
        """
        super().__init__()
        self.root = root
        self._after_ids: Dict[int, Tuple[str, TaskHandle]] = {}

    def submit(self, delay_ms: float, callback: Callable[[], None]) -> TaskHandle:
        handle = self._new_handle(delay_ms, callback)

        def fire():
            self._after_ids.pop(handle.task_id, None)
            handle.run()

        self._after_ids[handle.task_id] = (self.root.after(int(delay_ms), fire), handle)
        return handle

    def cancel_all(self):
        if self._after_ids:
            logger.debug("Cancelling %d pending Tk callbacks", len(self._after_ids))
        for after_id, handle in self._after_ids.values():
            handle.cancel()
            self.root.after_cancel(after_id)
        self._after_ids.clear()

    @property
    def pending_count(self) -> int:
        return len(self._after_ids)
