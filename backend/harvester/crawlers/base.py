from __future__ import annotations
from dataclasses import asdict, dataclass, field
from datetime import datetime


@dataclass
class Contact:
    name: str = "Unknown"
    email: str | None = None
    phone: str | None = None
    position: str | None = None


@dataclass
class JobPosting:
    title: str
    company: str = "Unknown Company"
    location: str | None = None
    salary: str | None = None
    type: str = "full-time"
    description: str = "No description available"


@dataclass
class PageContent:
    text: str = ""
    title: str | None = None


@dataclass
class HarvestedSource:
    """Everything gathered for one generated source URL, ready to persist."""

    id: str
    source_url: str
    domain: str
    page_title: str
    emails: list[str] = field(default_factory=list)
    contacts: list[Contact] = field(default_factory=list)
    job_postings: list[JobPosting] = field(default_factory=list)
    external_urls: list[str] = field(default_factory=list)
    redirect_chain: list[str] = field(default_factory=list)
    processing_time_ms: int = 0
    scraped_at: datetime = field(default_factory=datetime.utcnow)

    def contacts_payload(self) -> list[dict]:
        return [{k: v for k, v in asdict(c).items() if v is not None} for c in self.contacts]

    def job_postings_payload(self) -> list[dict]:
        return [{k: v for k, v in asdict(j).items() if v is not None} for j in self.job_postings]


class ScrapeError(Exception):
    pass


class ProviderError(ScrapeError):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"provider error status={status_code}: {message}")
        self.status_code = status_code
        self.message = message


class NetworkError(ScrapeError):
    def __init__(self, message: str):
        super().__init__(f"network error: {message}")
        self.message = message
