"""HTTP fetcher for printer status pages."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import requests
import soupsieve
import urllib3
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from urllib3.exceptions import InsecureRequestWarning

from .extractor import extract
from .models import EMPTY, Device, ExtractionResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
CHUNK_SIZE = 8192
USER_AGENT = "Origami/2.0 (+https://gitlab.com/pinecat/origamiv2)"


@dataclass
class PrinterClient:
    """Fetches a printer status page and extracts its toner details.

    Status pages commonly sit behind self-signed certificates, so TLS
    verification is off unless ``verify_tls`` is set. The flag applies to
    this client's requests only.
    """

    timeout: float = DEFAULT_TIMEOUT
    verify_tls: bool = False
    user_agent: str = USER_AGENT
    clock: Callable[[], float] = time.monotonic

    def __post_init__(self) -> None:
        if not self.verify_tls:
            urllib3.disable_warnings(InsecureRequestWarning)

    def fetch(self, device: Device, selectors: Sequence[str]) -> ExtractionResult:
        """Scrape one printer; any failure yields an empty result.

        ``timeout`` bounds the whole exchange, body download included, so a
        printer trickling bytes cannot stall the cycle.
        """
        logger.debug("Fetching status page for %s at %s", device.name, device.url)
        deadline = self.clock() + self.timeout
        try:
            with requests.get(
                device.url,
                timeout=self.timeout,
                verify=self.verify_tls,
                headers={"User-Agent": self.user_agent},
                stream=True,
            ) as response:
                if response.status_code != 200:
                    logger.debug("Status page for %s returned HTTP %d; parsing body anyway",
                                 device.name, response.status_code)
                body = self._read_body(response, deadline)
                encoding = response.encoding
        except requests.RequestException as exc:
            logger.warning("Could not access status page for %s (%s): %s",
                           device.name, device.url, exc)
            return EMPTY

        if body is None:
            logger.warning("Status page for %s took longer than %.1fs to download",
                           device.name, self.timeout)
            return EMPTY

        # requests reports ISO-8859-1 when no charset is declared; let bs4 sniff it
        if not encoding or encoding.lower() == "iso-8859-1":
            encoding = None

        try:
            fragment = select_fragment(body, selectors, encoding=encoding)
        except (ParserRejectedMarkup, soupsieve.SelectorSyntaxError) as exc:
            logger.warning("Could not create queryable document for %s: %s",
                           device.name, exc)
            return EMPTY

        if fragment is None:
            logger.debug("No selector matched the status page for %s", device.name)
            return EMPTY

        result = extract(fragment)
        logger.debug("Extracted toner=%r cartridge=%r for %s",
                     result.toner, result.cartridge, device.name)
        return result

    def _read_body(self, response: requests.Response, deadline: float) -> Optional[bytes]:
        chunks = []
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            chunks.append(chunk)
            if self.clock() > deadline:
                return None
        return b"".join(chunks)


def select_fragment(
    markup: str | bytes,
    selectors: Sequence[str],
    encoding: Optional[str] = None,
) -> Optional[str]:
    """Return the inner markup of the first element matched by the first
    selector that matches anything.

    Selectors are tried in order and later ones are only consulted when the
    earlier ones match nothing. ``encoding`` only applies to ``bytes`` markup.
    """
    if isinstance(markup, bytes):
        soup = BeautifulSoup(markup, "html.parser", from_encoding=encoding)
    else:
        soup = BeautifulSoup(markup, "html.parser")
    for selector in selectors:
        element = soup.select_one(selector)
        if element is not None:
            return element.decode_contents()
    return None
