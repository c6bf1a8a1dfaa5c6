import datetime as dt

import pytest

from origami.config import DEFAULT_PORT, ConfigError, load_config
from origami.models import Device

VALID_CONFIG = """[PRINTERS]
Lib1=10.0.0.5
Lab2=10.0.0.9:8443

[SEARCH]
.status
#tonerLevel
td[class="supply"]

[INTERVAL]
minutes=5

[PORT]
port=9000
"""


def write_config(tmp_path, text: str):
    path = tmp_path / "origami.conf"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_reads_all_sections(tmp_path):
    config = load_config(write_config(tmp_path, VALID_CONFIG))

    assert config.devices == (
        Device(name="Lab2", host="10.0.0.9", port=8443),
        Device(name="Lib1", host="10.0.0.5"),
    )
    assert config.selectors == (".status", "#tonerLevel", 'td[class="supply"]')
    assert config.interval_minutes == 5
    assert config.interval == dt.timedelta(minutes=5)
    assert config.port == 9000


def test_load_config_port_is_optional(tmp_path):
    text = VALID_CONFIG.split("[PORT]")[0]
    config = load_config(write_config(tmp_path, text))
    assert config.port == DEFAULT_PORT


def test_load_config_keeps_printer_name_case(tmp_path):
    text = VALID_CONFIG.replace("Lib1=", "LIBRARY-Main=")
    config = load_config(write_config(tmp_path, text))
    assert [device.name for device in config.devices] == ["LIBRARY-Main", "Lab2"]


@pytest.mark.parametrize("value", ["0", "-3", "five"])
def test_load_config_rejects_bad_interval(tmp_path, value):
    text = VALID_CONFIG.replace("minutes=5", f"minutes={value}")
    with pytest.raises(ConfigError):
        load_config(write_config(tmp_path, text))


def test_load_config_rejects_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Could not read"):
        load_config(tmp_path / "missing.conf")


def test_load_config_requires_printers(tmp_path):
    text = VALID_CONFIG.replace("Lib1=10.0.0.5\nLab2=10.0.0.9:8443\n", "")
    with pytest.raises(ConfigError, match="No printers"):
        load_config(write_config(tmp_path, text))


def test_load_config_rejects_invalid_selector(tmp_path):
    text = VALID_CONFIG.replace(".status", "div[[")
    with pytest.raises(ConfigError, match="Invalid selector"):
        load_config(write_config(tmp_path, text))


def test_load_config_rejects_bad_port(tmp_path):
    text = VALID_CONFIG.replace("port=9000", "port=70000")
    with pytest.raises(ConfigError):
        load_config(write_config(tmp_path, text))


def test_device_parse_without_port():
    device = Device.parse("Lib1", " 10.0.0.5 ")
    assert device.address == "10.0.0.5"
    assert device.url == "http://10.0.0.5"


def test_load_config_keeps_bracketed_attribute_selectors(tmp_path):
    text = VALID_CONFIG.replace("#tonerLevel\n", "[data-role=toner]\n    [id=supplies]\n")
    config = load_config(write_config(tmp_path, text))
    assert config.selectors == (
        ".status",
        "[data-role=toner]",
        "[id=supplies]",
        'td[class="supply"]',
    )
    assert config.interval_minutes == 5


def test_load_config_accepts_lone_attribute_selector(tmp_path):
    text = (
        "[PRINTERS]\nLib1=10.0.0.5\n\n"
        "[SEARCH]\n[id=supplies]\n\n"
        "[INTERVAL]\nminutes=1\n"
    )
    config = load_config(write_config(tmp_path, text))
    assert config.selectors == ("[id=supplies]",)


def test_load_config_rejects_entries_before_first_section(tmp_path):
    with pytest.raises(ConfigError, match="before any section"):
        load_config(write_config(tmp_path, "Lib1=10.0.0.5\n" + VALID_CONFIG))
