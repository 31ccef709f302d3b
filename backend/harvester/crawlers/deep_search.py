from __future__ import annotations
import logging
import time
import uuid
from datetime import datetime
from typing import Protocol
from urllib.parse import urlparse

from harvester.core.config import settings
from harvester.crawlers.base import HarvestedSource, PageContent, ScrapeError
from harvester.crawlers.extractors import (
    extract_contacts,
    extract_emails,
    extract_external_urls,
    extract_job_postings,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_TITLE = "Unknown Page"


class PageFetcher(Protocol):
    def fetch_page(self, url: str) -> PageContent: ...


def expand(url: str, client: PageFetcher, max_follow: int | None = None) -> HarvestedSource | None:
    """Fetch ``url`` and mine it; follow external links one hop when it has no emails.

    Returns None when the primary fetch fails. Failures on followed pages are
    skipped. Contacts and job postings always come from the primary page.
    """
    max_follow = settings.deep_search_max_follow if max_follow is None else max_follow
    started = time.monotonic()
    redirect_chain = [url]

    try:
        page = client.fetch_page(url)
    except ScrapeError as exc:
        logger.warning("[deep_search] primary fetch failed | url=%s error=%s", url, exc)
        return None

    emails = extract_emails(page.text)
    external_urls = extract_external_urls(page.text, url)

    if not emails and external_urls:
        logger.info("[deep_search] no emails, following links | url=%s candidates=%d", url, len(external_urls))
        for external_url in external_urls[:max_follow]:
            try:
                external_page = client.fetch_page(external_url)
            except ScrapeError as exc:
                logger.debug("[deep_search] external fetch skipped | url=%s error=%s", external_url, exc)
                continue
            emails.extend(extract_emails(external_page.text))
            redirect_chain.append(external_url)

    return HarvestedSource(
        id=uuid.uuid4().hex,
        source_url=url,
        domain=urlparse(url).hostname or "",
        page_title=page.title or DEFAULT_PAGE_TITLE,
        emails=list(dict.fromkeys(emails)),
        contacts=extract_contacts(page.text),
        job_postings=extract_job_postings(page.text),
        external_urls=external_urls,
        redirect_chain=redirect_chain,
        processing_time_ms=int((time.monotonic() - started) * 1000),
        scraped_at=datetime.utcnow(),
    )
