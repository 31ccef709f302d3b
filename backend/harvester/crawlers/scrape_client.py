from __future__ import annotations
import logging

import httpx
from bs4 import BeautifulSoup

from harvester.core.config import settings
from harvester.crawlers.base import NetworkError, PageContent, ProviderError

logger = logging.getLogger(__name__)

INCLUDE_TAGS = ["title", "meta", "h1", "h2", "h3", "p", "a", "div", "span"]
EXCLUDE_TAGS = ["script", "style", "nav", "header", "footer"]
OUTPUT_FORMATS = ["markdown", "html"]


def _title_from_html(html: str) -> str | None:
    if "<title" not in html.lower():
        return None
    soup = BeautifulSoup(html, "html.parser")
    if soup.title and soup.title.text and soup.title.text.strip():
        return soup.title.text.strip()
    return None


class ScrapeClient:
    """Fetches rendered pages through the Firecrawl scrape endpoint.

    One call to ``fetch_page`` is one provider request; there is no retry.
    Failures surface as ``ProviderError`` (provider said no) or
    ``NetworkError`` (transport failure or timeout).
    """

    def __init__(
        self,
        api_key: str,
        api_url: str | None = None,
        timeout: float | None = None,
        wait_for_ms: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_url = api_url or settings.firecrawl_api_url
        self.wait_for_ms = settings.scrape_wait_for_ms if wait_for_ms is None else wait_for_ms
        self._client = httpx.Client(
            timeout=settings.scrape_timeout_seconds if timeout is None else timeout,
            headers={"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"},
            transport=transport,
        )

    def __enter__(self) -> "ScrapeClient":
        return self

    def __exit__(self, *_exc) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def build_payload(self, url: str) -> dict:
        return {
            "url": url,
            "formats": OUTPUT_FORMATS,
            "includeTags": INCLUDE_TAGS,
            "excludeTags": EXCLUDE_TAGS,
            "waitFor": self.wait_for_ms,
        }

    def fetch_page(self, url: str) -> PageContent:
        logger.debug("[scrape] fetch | url=%s", url)
        try:
            resp = self._client.post(self.api_url, json=self.build_payload(url))
        except httpx.TimeoutException as exc:
            raise NetworkError(f"timeout fetching {url}: {exc}") from exc
        except httpx.RequestError as exc:
            raise NetworkError(str(exc) or exc.__class__.__name__) from exc

        if resp.status_code >= 300:
            try:
                body = resp.json()
            except ValueError:
                body = {}
            message = body.get("error") if isinstance(body, dict) else None
            raise ProviderError(resp.status_code, message or "Unknown error")

        try:
            body = resp.json()
        except ValueError as exc:
            raise ProviderError(resp.status_code, f"invalid JSON body: {resp.text[:200]}") from exc

        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("error") if isinstance(body, dict) else None
            raise ProviderError(resp.status_code, message or "Scraping failed")

        data = body.get("data") or {}
        if not isinstance(data, dict):
            raise ProviderError(resp.status_code, f"malformed data payload: {type(data).__name__}")
        markdown = data.get("markdown") or ""
        html = data.get("html") or ""
        if not isinstance(markdown, str) or not isinstance(html, str):
            raise ProviderError(resp.status_code, "malformed page content")
        metadata = data.get("metadata") or {}
        if not isinstance(metadata, dict):
            metadata = {}

        title = metadata.get("title")
        if not isinstance(title, str):
            title = None
        if not title and html:
            title = _title_from_html(html)

        return PageContent(text=markdown or html or "", title=title or None)
