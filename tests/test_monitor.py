import requests

import monitor_origami

CONFIG = """[PRINTERS]
Lib1=10.0.0.5
Lab2=10.0.0.9

[SEARCH]
.status

[INTERVAL]
minutes=5
"""


class DummyResponse:
    status_code = 200
    encoding = "utf-8"

    def iter_content(self, chunk_size=1):
        yield b'<div class="status">Toner 45% ABC123</div>'

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        pass


def test_main_once_exports_snapshot(monkeypatch, tmp_path, caplog):
    config_path = tmp_path / "origami.conf"
    config_path.write_text(CONFIG, encoding="utf-8")

    def fake_get(url, **kwargs):
        if url == "http://10.0.0.9":
            raise requests.Timeout("timed out")
        return DummyResponse()

    monkeypatch.setattr("requests.get", fake_get)
    export_path = tmp_path / "snapshot.xlsx"

    with caplog.at_level("INFO"):
        code = monitor_origami.main(
            ["-f", str(config_path), "--once", "--export", str(export_path)]
        )

    assert code == 0
    assert export_path.exists()
    assert "Lib1 | toner: 45% | cartridge: ABC123" in caplog.text
    assert "Lab2 | toner: N/A | cartridge: N/A" in caplog.text


def test_main_reports_config_error(tmp_path, caplog):
    with caplog.at_level("ERROR"):
        code = monitor_origami.main(["-f", str(tmp_path / "missing.conf"), "--once"])

    assert code == 2
    assert "Could not read configuration file" in caplog.text
