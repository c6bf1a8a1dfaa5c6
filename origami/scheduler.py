"""Background loop that re-runs the poll cycle at a fixed interval."""

from __future__ import annotations

import datetime as dt
import logging
import threading
from typing import Optional

from .runner import OrigamiRunner

logger = logging.getLogger(__name__)


class PollScheduler:
    """
    Runs a poll cycle immediately and then once per interval.

    The loop lives on its own daemon thread so page views never wait on
    printer I/O. ``stop()`` wakes the interval wait and joins the thread.
    """

    def __init__(
        self,
        runner: OrigamiRunner,
        interval: dt.timedelta,
        port: Optional[int] = None,
    ):
        self.runner = runner
        self.interval = interval
        self.port = port
        self.cycles = 0

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the polling thread."""
        if self.is_running:
            if self._stop_event.is_set():
                raise RuntimeError(
                    "Previous polling thread has not exited; call stop() before restarting"
                )
            logger.warning("Polling thread already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._poll_loop,
            name="OrigamiPoller",
            daemon=True,
        )
        self._thread.start()
        logger.info(
            "Server started on port %s! Polling %d printers every %s",
            self.port if self.port is not None else "n/a",
            len(self.runner.devices),
            self.interval,
        )

    def stop(self, timeout: float = 5.0) -> None:
        """Signal the polling thread and wait for it to exit."""
        self._stop_event.set()
        if self._thread is None:
            return

        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning("Polling thread did not stop within %.1fs", timeout)
        else:
            logger.info("Polling thread stopped after %d cycles", self.cycles)

    def run_forever(self) -> None:
        """Run the polling loop in the calling thread until ``stop()``."""
        if self.is_running:
            raise RuntimeError("Polling thread already running")
        self._stop_event.clear()
        self._poll_loop()

    def _poll_loop(self) -> None:
        self._run_once()
        while not self._stop_event.wait(timeout=self.interval.total_seconds()):
            self._run_once()

    def _run_once(self) -> None:
        try:
            self.runner.run_cycle()
        except Exception:  # noqa: BLE001
            logger.exception("Poll cycle failed; keeping previous snapshot")
        else:
            self.cycles += 1
