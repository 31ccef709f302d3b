from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel

from harvester.schemas.batch import BatchOut


class ContactOut(BaseModel):
    name: str
    email: str | None = None
    phone: str | None = None
    position: str | None = None


class JobPostingOut(BaseModel):
    title: str
    company: str
    location: str | None = None
    salary: str | None = None
    type: str | None = None
    description: str


class SourceRecordOut(BaseModel):
    id: str
    batch_id: str
    source_url: str
    domain: str
    page_title: str
    emails: list[str]
    contacts: list[ContactOut]
    job_postings: list[JobPostingOut]
    external_urls: list[str]
    redirect_chain: list[str]
    processing_time_ms: int
    scraped_at: datetime

    class Config:
        from_attributes = True


class BatchResultsOut(BaseModel):
    batch: BatchOut
    records: list[SourceRecordOut]
