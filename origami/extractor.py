"""Pattern rules for pulling toner and cartridge tokens out of markup."""

from __future__ import annotations

import re

from .models import EMPTY, ExtractionResult

TONER_PATTERN = re.compile(r"\d\d%|\d%", re.ASCII)
CARTRIDGE_PATTERN = re.compile(r"[A-Z0-9]{6}")


def extract(markup: str | None) -> ExtractionResult:
    """Return the first toner percentage and cartridge code found in ``markup``.

    A missing token is reported as an empty string, never as an error.
    """
    if not markup:
        return EMPTY
    return ExtractionResult(
        toner=_first_match(TONER_PATTERN, markup),
        cartridge=_first_match(CARTRIDGE_PATTERN, markup),
    )


def _first_match(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    return match.group(0) if match else ""
