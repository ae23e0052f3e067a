"""Retrieval of listing pages over HTTP."""
from __future__ import annotations

import logging
from typing import Mapping, Optional

import requests

from wirescout.domain import FetchError, PageFetcher

_DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/126.0.0.0 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,image/apng,*/*;q=0.8"
    ),
    "Accept-Language": "en-GB,en;q=0.9,en-US;q=0.8",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Pragma": "no-cache",
    "Cache-Control": "no-cache",
}


class RequestsPageFetcher(PageFetcher):
    """Fetcher based on ``requests`` sending browser-like headers."""

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        timeout: float | None = 30,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout
        self._log = logging.getLogger("wirescout.fetcher")

    def fetch(self, url: str, headers: Optional[Mapping[str, str]] = None) -> str:
        self._log.info("GET %s", url)
        try:
            response = self._session.get(
                url, headers=self._build_headers(headers), timeout=self._timeout
            )
        except requests.RequestException as exc:
            raise FetchError(url, f"request to {url} failed: {exc}") from exc

        if not response.ok:
            raise FetchError(
                url,
                f"HTTP {response.status_code}: {response.reason or 'error'}",
                status_code=response.status_code,
            )
        return response.text

    def close(self) -> None:
        self._session.close()

    def _build_headers(self, extra: Optional[Mapping[str, str]] = None) -> dict[str, str]:
        """Merge the default browser headers with the site-specific ones.

        Some sites only serve full listings to clients that look like real
        browsers, so the defaults are always sent and site values take
        precedence when present.
        """

        headers: dict[str, str] = dict(_DEFAULT_HEADERS)
        if extra:
            headers.update({k: v for k, v in extra.items() if v})
        return headers


__all__ = ["RequestsPageFetcher"]
