"""Holder for the single published snapshot."""

from __future__ import annotations

import logging
import threading

from .models import Snapshot

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Single-slot store swapped wholesale once per poll cycle.

    Snapshots are immutable, so ``current()`` hands out the reference as is.
    Readers never take the lock; it only serialises writers.
    """

    def __init__(self, initial: Snapshot) -> None:
        self._current = initial
        self._write_lock = threading.Lock()

    def current(self) -> Snapshot:
        return self._current

    def publish(self, snapshot: Snapshot) -> None:
        if not isinstance(snapshot, Snapshot):
            raise TypeError(f"Expected Snapshot, got {type(snapshot).__name__}")
        with self._write_lock:
            self._current = snapshot
        logger.debug("Published snapshot with %d rows (last updated %s)",
                     len(snapshot.rows), snapshot.last_updated)
