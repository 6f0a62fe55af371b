"""Debounced persistence of the engine's counters."""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class SaveScheduler:
    """Coalesces bursts of save requests into one call of ``save``.

    Every ``schedule_save()`` restarts the timer, so the write happens once
    ``wait`` seconds have passed without a new request. ``flush()`` writes a
    pending save right away; it is what short-lived processes call before
    exiting.

    The timer calls ``save`` on its own thread. Code changing the state that
    ``save`` serializes holds ``state_lock`` while doing so, and ``save``
    holds it while taking its snapshot.
    """

    def __init__(self, save: Callable[[], None], wait: float = 1.0):
        self._save = save
        self.wait = wait
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self.state_lock = threading.RLock()
        self.writes = 0

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def schedule_save(self):
        """Request a save, superseding any save that is still waiting."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(self.wait, self._fire)
            timer.daemon = True
            self._timer = timer
            timer.start()

    def flush(self) -> bool:
        """Run a pending save now. Returns True if something was written."""
        with self._lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            self._timer = None
        self._write()
        return True

    def cancel(self):
        """Drop a pending save without writing."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _fire(self):
        with self._lock:
            if self._timer is None or self._timer is not threading.current_thread():
                # superseded or flushed while this timer was waiting for the lock
                return
            self._timer = None
        try:
            self._write()
        except Exception:
            logger.exception("Debounced save failed")

    def _write(self):
        self.writes += 1
        self._save()
