"""
ResetScheduler - cancellable one-shot timer for the post-submit form reset.
"""

import threading
from typing import Callable


class ResetScheduler:
    """
    Runs a callback once after a delay, unless cancelled first.

    Scheduling again replaces any task that has not fired yet, so at most
    one reset is ever pending.
    """

    def __init__(self):
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        """
        Schedule `callback` to run after `delay_seconds`.

        Args:
            delay_seconds: Delay before the callback fires
            callback: Zero-argument callable
        """
        with self._lock:
            self._cancel_locked()

            def fire():
                with self._lock:
                    if self._timer is not timer:
                        return
                    self._timer = None
                callback()

            timer = threading.Timer(delay_seconds, fire)
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> bool:
        """
        Cancel the pending task.

        Returns:
            True if a task was pending
        """
        with self._lock:
            return self._cancel_locked()

    def _cancel_locked(self) -> bool:
        if self._timer is None:
            return False
        self._timer.cancel()
        self._timer = None
        return True

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None
