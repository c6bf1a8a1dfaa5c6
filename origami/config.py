"""Loader for the sectioned ``origami.conf`` file."""

from __future__ import annotations

import datetime as dt
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import soupsieve

from .models import Device, sort_devices

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.getenv("ORIGAMI_CONFIG", "origami.conf")
DEFAULT_PORT = 8080
SECTION_HEADERS = ("[PRINTERS]", "[SEARCH]", "[INTERVAL]", "[PORT]")
COMMENT_PREFIX = ";"


class ConfigError(ValueError):
    """Raised when the configuration file cannot be used."""


@dataclass(frozen=True)
class OrigamiConfig:
    """Printers, selectors, interval and port read from the config file."""

    devices: Tuple[Device, ...]
    selectors: Tuple[str, ...]
    interval_minutes: int
    port: int = DEFAULT_PORT

    @property
    def interval(self) -> dt.timedelta:
        return dt.timedelta(minutes=self.interval_minutes)


def load_config(path: str | Path) -> OrigamiConfig:
    """Read and validate a configuration file.

    Expected layout::

        [PRINTERS]
        Lib1=10.0.0.5
        Lab2=10.0.0.9:8443

        [SEARCH]
        .status
        td.tonerLevel

        [INTERVAL]
        minutes=5

        [PORT]
        port=8080
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            sections = _read_sections(handle)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Could not read configuration file {path}: {exc}") from exc

    config = OrigamiConfig(
        devices=_parse_printers(sections),
        selectors=_parse_selectors(sections),
        interval_minutes=_parse_interval(sections),
        port=_parse_port(sections),
    )
    logger.debug("Loaded %d printers and %d selectors from %s",
                 len(config.devices), len(config.selectors), path)
    return config


def _read_sections(lines: Iterable[str]) -> Dict[str, List[str]]:
    """Group non-blank lines under the known section headers.

    Only the four known headers start a section, so selectors such as
    ``[data-role=toner]`` stay in ``[SEARCH]``.
    """
    sections: Dict[str, List[str]] = {}
    current = None
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue
        if line in SECTION_HEADERS:
            current = line[1:-1]
            sections.setdefault(current, [])
            continue
        if current is None:
            raise ConfigError(f"Line {lineno} appears before any section header: {line!r}")
        sections[current].append(line)
    return sections


def _split_entry(line: str) -> Tuple[str, str]:
    key, sep, value = line.partition("=")
    if not sep:
        return line, ""
    return key.strip(), value.strip()


def _parse_printers(sections: Dict[str, List[str]]) -> Tuple[Device, ...]:
    if "PRINTERS" not in sections:
        raise ConfigError("Missing [PRINTERS] section")

    devices: Dict[str, Device] = {}
    for line in sections["PRINTERS"]:
        name, address = _split_entry(line)
        if not address:
            raise ConfigError(f"Printer {name!r} has no address")
        devices[name] = Device.parse(name, address)
    if not devices:
        raise ConfigError("No printers configured in [PRINTERS]")
    return sort_devices(devices.values())


def _parse_selectors(sections: Dict[str, List[str]]) -> Tuple[str, ...]:
    if "SEARCH" not in sections:
        raise ConfigError("Missing [SEARCH] section")

    selectors = tuple(sections["SEARCH"])
    if not selectors:
        raise ConfigError("No selectors configured in [SEARCH]")
    for selector in selectors:
        try:
            soupsieve.compile(selector)
        except soupsieve.SelectorSyntaxError as exc:
            raise ConfigError(f"Invalid selector {selector!r}: {exc}") from exc
    return selectors


def _last_value(sections: Dict[str, List[str]], section: str) -> Optional[str]:
    entries = sections.get(section) or []
    if not entries:
        return None
    return _split_entry(entries[-1])[1]


def _parse_interval(sections: Dict[str, List[str]]) -> int:
    if "INTERVAL" not in sections:
        raise ConfigError("Missing [INTERVAL] section")

    value = _last_value(sections, "INTERVAL")
    try:
        interval = int(value or "")
    except ValueError as exc:
        raise ConfigError("Invalid interval in configuration file!") from exc
    if interval < 1:
        raise ConfigError("Interval may not be less than 1 minute!")
    return interval


def _parse_port(sections: Dict[str, List[str]]) -> int:
    value = _last_value(sections, "PORT")
    if value is None:
        return DEFAULT_PORT
    try:
        port = int(value)
    except ValueError as exc:
        raise ConfigError("Invalid port in configuration file!") from exc
    if not 0 < port < 65536:
        raise ConfigError(f"Port {port} is out of range")
    return port
