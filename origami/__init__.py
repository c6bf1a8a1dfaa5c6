"""Origami package initialization."""

from .config import ConfigError, OrigamiConfig, load_config
from .extractor import extract
from .models import EMPTY, Device, ExtractionResult, PrinterStatus, Snapshot
from .runner import OrigamiRunner
from .scheduler import PollScheduler
from .scraper import PrinterClient, select_fragment
from .store import SnapshotStore

__all__ = [
    "ConfigError",
    "Device",
    "EMPTY",
    "ExtractionResult",
    "OrigamiConfig",
    "OrigamiRunner",
    "PollScheduler",
    "PrinterClient",
    "PrinterStatus",
    "Snapshot",
    "SnapshotStore",
    "extract",
    "load_config",
    "select_fragment",
]
