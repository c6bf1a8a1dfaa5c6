"""Core data models for Origami."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

TIMESTAMP_FORMAT = "%Y-%m-%d_%H:%M:%S"


@dataclass(frozen=True)
class Device:
    """A printer whose status page is polled."""

    name: str
    host: str
    port: Optional[int] = None

    @classmethod
    def parse(cls, name: str, address: str) -> "Device":
        """Build a device from a ``host`` or ``host:port`` address string."""
        address = address.strip()
        host, sep, port = address.rpartition(":")
        if sep and host and port.isdigit():
            return cls(name=name, host=host, port=int(port))
        return cls(name=name, host=address)

    @property
    def address(self) -> str:
        if self.port is None:
            return self.host
        return f"{self.host}:{self.port}"

    @property
    def url(self) -> str:
        return f"http://{self.address}"


@dataclass(frozen=True)
class ExtractionResult:
    """Toner level and cartridge type pulled from a status page."""

    toner: str = ""
    cartridge: str = ""

    @property
    def found(self) -> bool:
        return bool(self.toner or self.cartridge)


EMPTY = ExtractionResult()


@dataclass(frozen=True)
class PrinterStatus:
    """One row of a snapshot."""

    device: Device
    result: ExtractionResult = EMPTY

    @property
    def name(self) -> str:
        return self.device.name

    @property
    def url(self) -> str:
        return self.device.url

    @property
    def toner(self) -> str:
        return self.result.toner

    @property
    def cartridge(self) -> str:
        return self.result.cartridge


@dataclass(frozen=True)
class Snapshot:
    """The complete set of latest printer results plus timing metadata."""

    rows: Tuple[PrinterStatus, ...]
    last_updated: Optional[dt.datetime] = None
    next_update: Optional[dt.datetime] = None

    @classmethod
    def placeholder(cls, devices: Iterable[Device]) -> "Snapshot":
        """Snapshot published before the first cycle completes."""
        return cls(rows=tuple(PrinterStatus(device=d) for d in sort_devices(devices)))

    @property
    def is_placeholder(self) -> bool:
        return self.last_updated is None

    def to_dict(self) -> dict:
        return {
            "last_updated": _format_timestamp(self.last_updated),
            "next_update": _format_timestamp(self.next_update),
            "printers": [
                {
                    "name": row.name,
                    "address": row.url,
                    "toner": row.toner,
                    "cartridge": row.cartridge,
                }
                for row in self.rows
            ],
        }


def sort_devices(devices: Iterable[Device]) -> Tuple[Device, ...]:
    """Return devices in the stable name order used by every snapshot."""
    return tuple(sorted(devices, key=lambda device: device.name))


def _format_timestamp(value: Optional[dt.datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.strftime(TIMESTAMP_FORMAT)
