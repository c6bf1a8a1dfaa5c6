import datetime as dt

from openpyxl import load_workbook

from origami.export import export_snapshot_to_xlsx
from origami.models import Device, ExtractionResult, PrinterStatus, Snapshot


def test_export_snapshot_to_xlsx(tmp_path):
    stamp = dt.datetime(2025, 4, 1, 12, 0, 0)
    snapshot = Snapshot(
        rows=(
            PrinterStatus(device=Device.parse("Lab2", "10.0.0.9")),
            PrinterStatus(
                device=Device.parse("Lib1", "10.0.0.5"),
                result=ExtractionResult(toner="45%", cartridge="ABC123"),
            ),
        ),
        last_updated=stamp,
        next_update=stamp + dt.timedelta(minutes=5),
    )

    export_path = export_snapshot_to_xlsx(snapshot, tmp_path / "out" / "printers.xlsx")

    assert export_path.exists()
    worksheet = load_workbook(export_path).active
    rows = [[cell.value for cell in row] for row in worksheet.iter_rows()]
    assert rows[0] == ["name", "address", "toner", "cartridge", "last_updated"]
    assert rows[2] == ["Lib1", "http://10.0.0.5", "45%", "ABC123", "2025-04-01_12:00:00"]
    assert rows[1][0] == "Lab2"
