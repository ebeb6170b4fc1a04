"""
Cancellable engine turn.

An EngineTask runs one engine move on a background timer thread. The
session owns at most one task at a time and cancels it on reset, mode
change and teardown. Cancelling:

    - stops the timer if the delay has not elapsed yet
    - makes `cancelled` true, which the running search polls to unwind
    - marks the task done immediately if its work never started

The session additionally compares the task's generation with its own
before applying a result, so a late completion is always dropped.
"""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class EngineTask:
    """Handle for one scheduled engine turn."""

    def __init__(self, generation: int, delay: float, work: Callable[["EngineTask"], None]):
        """
        Args:
            generation: Session generation the task was scheduled in
            delay: Seconds to wait before running `work`
            work: Callable receiving this task; runs on the timer thread
        """
        self.generation = generation
        self.delay = delay
        self._work = work

        self._lock = threading.Lock()
        self._running = False
        self._cancelled = threading.Event()
        self._done = threading.Event()

        self._timer = threading.Timer(delay, self._run)
        self._timer.daemon = True
        self._timer.name = f"engine-turn-{generation}"

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def start(self):
        self._timer.start()

    def cancel(self):
        """Cancel the task. Safe to call more than once."""
        self._cancelled.set()
        self._timer.cancel()
        with self._lock:
            if not self._running:
                self._done.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the task finished or was cancelled. Returns False on timeout."""
        return self._done.wait(timeout)

    def _run(self):
        with self._lock:
            if self._cancelled.is_set():
                return
            self._running = True

        try:
            self._work(self)
        except Exception as e:
            logger.error(f"Engine turn failed: {e}", exc_info=True)
        finally:
            self._done.set()

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "done" if self.done else "pending"
        return f"EngineTask(generation={self.generation}, {state})"
