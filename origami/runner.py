"""Core poll cycle workflow for Origami."""

from __future__ import annotations

import datetime as dt
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence

from .models import EMPTY, Device, ExtractionResult, PrinterStatus, Snapshot, sort_devices
from .scraper import PrinterClient
from .store import SnapshotStore

logger = logging.getLogger(__name__)

Fetcher = Callable[[Device, Sequence[str]], ExtractionResult]
MAX_WORKERS = 8


@dataclass
class OrigamiRunner:
    """Coordinates fetch, extract and publish steps for one poll cycle."""

    devices: Iterable[Device]
    selectors: Sequence[str]
    interval: dt.timedelta
    store: SnapshotStore
    fetcher: Fetcher = field(default_factory=lambda: PrinterClient().fetch)
    clock: Callable[[], dt.datetime] = dt.datetime.now
    max_workers: Optional[int] = None

    def __post_init__(self) -> None:
        self.devices = sort_devices(self.devices)
        self.selectors = tuple(self.selectors)
        if self.max_workers is None:
            self.max_workers = max(1, min(MAX_WORKERS, len(self.devices)))

    def run_cycle(self) -> Snapshot:
        """Scrape every printer and publish the resulting snapshot."""
        logger.info("Starting poll cycle for %d printers", len(self.devices))

        if self.max_workers == 1:
            results = [self._fetch_one(device) for device in self.devices]
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers,
                                    thread_name_prefix="OrigamiFetch") as pool:
                results = list(pool.map(self._fetch_one, self.devices))

        last_updated = self.clock()
        snapshot = Snapshot(
            rows=tuple(
                PrinterStatus(device=device, result=result)
                for device, result in zip(self.devices, results)
            ),
            last_updated=last_updated,
            next_update=last_updated + self.interval,
        )
        self.store.publish(snapshot)

        found = sum(1 for result in results if result.found)
        logger.info("Poll cycle complete: %d/%d printers reported, next update at %s",
                    found, len(results), snapshot.next_update)
        return snapshot

    def _fetch_one(self, device: Device) -> ExtractionResult:
        try:
            return self.fetcher(device, self.selectors)
        except Exception:  # noqa: BLE001
            logger.exception("Unexpected failure while polling %s", device.name)
            return EMPTY
