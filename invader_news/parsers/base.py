from __future__ import annotations

from abc import ABC, abstractmethod

from invader_news.schemas import ParsedResult
from invader_news.services.fetcher import fetch_news


class BaseParser(ABC):
    """Base class for news page parsers.

    Parsers are pure: ``parse`` takes the HTML of the page and returns
    dated records without doing any I/O. Fetching is delegated to the
    fetcher service so that parsing can run on cached HTML too.
    """

    @abstractmethod
    def parse(self, html: str | bytes) -> ParsedResult:
        """Return all day records found in *html*, oldest first."""
        ...

    async def fetch_and_parse(self, url: str | None = None) -> ParsedResult:
        """Fetch the page at *url* (the configured news page by default) and parse it."""
        html = await fetch_news(url)
        return self.parse(html)
