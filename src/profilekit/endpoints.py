from __future__ import annotations

import asyncio
import logging

import requests

from .errors import ErrorKind, WidgetError, error_for_status

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"

def absolute_url(base_url: str, path: str) -> str:
    base = base_url.rstrip("/")
    if not path.startswith("/"):
        path = "/" + path
    return f"{base}{path}"

class ImageEndpoint:
    """Self-hosted image endpoints (``/api/wave-animation`` and friends)."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, *, timeout: float = 10, session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def probe(self, url: str, method: str = "GET", *, not_found: str | None = None) -> str:
        """Request ``url`` and return it if the endpoint answered 2xx."""
        try:
            r = self._session.request(method, url, timeout=self.timeout)
        except requests.RequestException as e:
            raise WidgetError(ErrorKind.NETWORK, f"Network request failed: {e}") from e
        if not r.ok:
            raise error_for_status(r.status_code, r.reason or "", not_found=not_found)
        ctype = r.headers.get("Content-Type", "")
        if method == "GET" and ctype and "svg" not in ctype:
            logger.debug("unexpected content type %r from %s", ctype, url)
        return url

    async def fetch(self, url: str, method: str = "GET", *, not_found: str | None = None) -> str:
        return await asyncio.to_thread(self.probe, url, method, not_found=not_found)
