from __future__ import annotations
from harvester.schemas.batch import BatchCreate, BatchOut, BatchStartResponse, BatchSummaryOut
from harvester.schemas.source_record import BatchResultsOut, ContactOut, JobPostingOut, SourceRecordOut

__all__ = [
    "BatchCreate",
    "BatchOut",
    "BatchStartResponse",
    "BatchSummaryOut",
    "BatchResultsOut",
    "ContactOut",
    "JobPostingOut",
    "SourceRecordOut",
]
