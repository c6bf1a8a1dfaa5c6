"""Spreadsheet export of a snapshot."""

from __future__ import annotations

import logging
from pathlib import Path

from openpyxl import Workbook

from .models import TIMESTAMP_FORMAT, Snapshot

logger = logging.getLogger(__name__)

EXPORT_HEADERS = ["name", "address", "toner", "cartridge", "last_updated"]


def export_snapshot_to_xlsx(snapshot: Snapshot, path: str | Path) -> Path:
    """Write one row per printer to an xlsx workbook at ``path``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    last_updated = (
        snapshot.last_updated.strftime(TIMESTAMP_FORMAT)
        if snapshot.last_updated
        else ""
    )

    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "printers"
    worksheet.append(EXPORT_HEADERS)
    for row in snapshot.rows:
        worksheet.append([row.name, row.url, row.toner, row.cartridge, last_updated])

    workbook.save(path)
    logger.info("Exported %d printer rows to %s", len(snapshot.rows), path)
    return path
