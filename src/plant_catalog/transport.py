"""Transports that fetch catalog resources over HTTP or from a directory."""

import logging
from pathlib import Path
from urllib.parse import quote

import requests

from plant_catalog.config import REQUEST_TIMEOUT
from plant_catalog.errors import LoadError
from plant_catalog.protocols import FetcherProtocol


class HttpFetcher:
    """Fetch resources relative to a base URL."""

    def __init__(self, base_url: str, *, timeout: float = REQUEST_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.sess = requests.Session()
        self.logger = logging.getLogger("transport")
        self.logger.debug(f"HTTP fetcher ready: base_url {self.base_url!r}")

    def url_for(self, path: str) -> str:
        """Build the URL of a resource. Only characters the URL grammar forbids are quoted."""
        return self.base_url + quote(path, safe="/")

    def fetch(self, path: str) -> bytes:
        """Fetch raw bytes, raising LoadError on network failure or non-2xx status."""
        url = self.url_for(path)
        self.logger.debug(f"Making request: {url!r}")
        try:
            # The body is decoded by us; ask requests not to undo gzip framing itself.
            r = self.sess.get(url, timeout=self.timeout, headers={"Accept-Encoding": "identity"})
        except requests.RequestException as e:
            msg = f"Request failed: {url!r}: {e}"
            raise LoadError(msg) from e
        if not r.ok:
            msg = f"HTTP error {r.status_code} fetching {url!r}"
            raise LoadError(msg)
        return r.content


class DirectoryFetcher:
    """Fetch resources from a local directory laid out like the published site."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).expanduser().resolve()
        self.logger = logging.getLogger("transport")

    def fetch(self, path: str) -> bytes:
        """Read raw bytes, raising LoadError if the file is missing or escapes the root."""
        fname = (self.root / path).resolve()
        if not fname.is_relative_to(self.root):
            msg = f"Path escapes data directory: {path!r}"
            raise LoadError(msg)
        self.logger.debug(f"Reading file: {str(fname)!r}")
        try:
            return fname.read_bytes()
        except OSError as e:
            msg = f"Cannot read {str(fname)!r}: {e}"
            raise LoadError(msg) from e


def open_fetcher(source: str | Path) -> FetcherProtocol:
    """Pick a transport for a data source: HTTP for URLs, a directory otherwise."""
    source_str = str(source)
    if source_str.startswith(("http://", "https://")):
        return HttpFetcher(source_str)
    return DirectoryFetcher(source_str)
