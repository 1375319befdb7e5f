from __future__ import annotations

"""
Watch Mode.

Polls the project tree for source changes and re-runs a callback after a
debounce window. Runs never overlap: a trigger that fires while the
previous run still holds the lock is dropped, not queued.
"""

import logging
import os
import re
import threading
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

POLL_INTERVAL_S = 0.5
DEBOUNCE_S = 0.3

WATCHED_FILE_RX = re.compile(r"\.(js|jsx|ts|tsx|json)$")
IGNORED_DIRS = frozenset({"node_modules", ".next", ".git"})

Snapshot = Dict[str, float]


class ProjectWatcher:
    """
    Change detector with debounced, non-overlapping callback execution.

    Args:
        root: Directory to watch.
        on_change: Callable run after the tree settles.
        interval: Seconds between polls.
        debounce: Quiet period after the last change before running.
    """

    def __init__(
            self,
            root: str,
            on_change: Callable[[], None],
            interval: float = POLL_INTERVAL_S,
            debounce: float = DEBOUNCE_S,
    ) -> None:
        self.root = root
        self.on_change = on_change
        self.interval = interval
        self.debounce = debounce

        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._stop = threading.Event()
        self._snapshot: Snapshot = self.snapshot()

    # -------------------------------------------------------------------------
    # Change detection
    # -------------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        """Map every watched file to its modification time."""
        state: Snapshot = {}
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames[:] = [d for d in dirnames if d not in IGNORED_DIRS]
            for name in filenames:
                if not WATCHED_FILE_RX.search(name):
                    continue
                path = os.path.join(dirpath, name)
                try:
                    state[path] = os.stat(path).st_mtime
                except OSError:
                    # Deleted between listing and stat
                    continue
        return state

    def poll_once(self) -> bool:
        """
        Take a new snapshot and compare it with the previous one.

        Returns:
            bool: True if any watched file was added, removed or modified.
        """
        current = self.snapshot()
        changed = current != self._snapshot
        self._snapshot = current
        return changed

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def trigger(self) -> bool:
        """
        Run the callback unless a run is already in flight.

        Returns:
            bool: True if the callback ran.
        """
        if not self._lock.acquire(blocking=False):
            logger.debug("Analysis already running; change ignored")
            return False
        try:
            self.on_change()
        finally:
            self._lock.release()
        return True

    def schedule(self) -> None:
        """(Re)start the debounce timer."""
        if self._timer is not None:
            self._timer.cancel()
        self._timer = threading.Timer(self.debounce, self.trigger)
        self._timer.daemon = True
        self._timer.start()

    def run(self) -> None:
        """Poll until stop() is called (or KeyboardInterrupt propagates)."""
        logger.info(f"Watching '{self.root}' for changes (Ctrl+C to stop)")
        while not self._stop.wait(self.interval):
            if self.poll_once():
                logger.info("Change detected; re-analyzing")
                self.schedule()

    def stop(self) -> None:
        self._stop.set()
        if self._timer is not None:
            self._timer.cancel()
