"""Best-effort extraction of fields from OSSInsight web pages."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import aiohttp
from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from ossinsight_mcp.errors import FetchError

logger = logging.getLogger(__name__)


def extract(document: BeautifulSoup, selector: str) -> str:
    """Return the combined, stripped text of every element matching selector.

    Never raises: no match or an unusable selector gives an empty string.
    """
    try:
        elements = document.select(selector)
    except (SelectorSyntaxError, ValueError, NotImplementedError):
        logger.debug("Unusable selector: %r", selector)
        return ""
    return "".join(element.get_text() for element in elements).strip()


def extract_all(html: str, selectors: Mapping[str, str]) -> dict[str, str]:
    """Parse html once and extract every selector by key."""
    soup = BeautifulSoup(html, "html.parser")
    return {key: extract(soup, selector) for key, selector in selectors.items()}


class PageSource:
    """Fetches rendered HTML pages and scrapes named fields from them."""

    def __init__(self, headers: dict[str, str] | None = None) -> None:
        self.headers = headers or {}

    async def fetch(self, url: str) -> str:
        """GET a page and return its HTML.

        Raises:
            FetchError: If the server answers with a non-2xx status.
        """
        logger.debug("Fetching page %s", url)
        async with aiohttp.ClientSession(headers=self.headers) as session:
            response = await session.request("GET", url)

            if not 200 <= response.status < 300:
                raise FetchError(url, response.status, response.reason or "")

            return await response.text()

    async def scrape(self, url: str, selectors: Mapping[str, str]) -> dict[str, str]:
        """Fetch a page and extract one text field per selector.

        Args:
            url: Page to fetch.
            selectors: Mapping of result key to CSS selector.

        Returns:
            Dict with every key of selectors; unmatched selectors map to "".
        """
        html = await self.fetch(url)
        return extract_all(html, selectors)
