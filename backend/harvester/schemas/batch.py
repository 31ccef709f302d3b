from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel


class BatchCreate(BaseModel):
    job_titles: list[str]
    api_key: str | None = None


class BatchStartResponse(BaseModel):
    batch_id: str
    total_sources: int
    status: str


class BatchOut(BaseModel):
    id: str
    job_titles: list[str]
    status: str
    total_sources: int | None
    completed_sources: int
    created_at: datetime
    finished_at: datetime | None

    class Config:
        from_attributes = True


class BatchSummaryOut(BatchOut):
    contact_data_count: int = 0
