from __future__ import annotations
import uuid
from datetime import datetime

from sqlalchemy import desc, func, update
from sqlalchemy.orm import Session

from harvester.crawlers.base import HarvestedSource
from harvester.models.batch import STATUS_COMPLETED, STATUS_PROCESSING, HarvestBatch
from harvester.models.source_record import SourceRecord


class ResultStore:
    """Durable storage for batches and their per-source records.

    Every write commits immediately so pollers see progress as it happens.
    SQLAlchemy errors propagate after a rollback.
    """

    def __init__(self, db: Session):
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def create_batch(self, job_titles: list[str]) -> HarvestBatch:
        batch = HarvestBatch(
            id=str(uuid.uuid4()),
            job_titles=list(job_titles),
            status=STATUS_PROCESSING,
            total_sources=None,
            completed_sources=0,
            created_at=datetime.utcnow(),
        )
        self.db.add(batch)
        self._commit()
        self.db.refresh(batch)
        return batch

    def set_total_sources(self, batch_id: str, total: int) -> None:
        self.db.execute(update(HarvestBatch).where(HarvestBatch.id == batch_id).values(total_sources=total))
        self._commit()

    def append_record(self, batch_id: str, source: HarvestedSource) -> SourceRecord:
        record = SourceRecord(
            id=source.id,
            batch_id=batch_id,
            source_url=source.source_url,
            domain=source.domain,
            page_title=source.page_title,
            emails=list(source.emails),
            contacts=source.contacts_payload(),
            job_postings=source.job_postings_payload(),
            external_urls=list(source.external_urls),
            redirect_chain=list(source.redirect_chain),
            processing_time_ms=source.processing_time_ms,
            scraped_at=source.scraped_at,
        )
        self.db.add(record)
        self._commit()
        return record

    def increment_progress(self, batch_id: str) -> None:
        self.db.execute(
            update(HarvestBatch)
            .where(HarvestBatch.id == batch_id, HarvestBatch.status == STATUS_PROCESSING)
            .values(completed_sources=HarvestBatch.completed_sources + 1)
        )
        self._commit()

    def finalize(self, batch_id: str, completed: int) -> bool:
        result = self.db.execute(
            update(HarvestBatch)
            .where(HarvestBatch.id == batch_id, HarvestBatch.status == STATUS_PROCESSING)
            .values(status=STATUS_COMPLETED, completed_sources=completed, finished_at=datetime.utcnow())
        )
        self._commit()
        return result.rowcount == 1

    def get_batch(self, batch_id: str) -> HarvestBatch | None:
        batch = self.db.get(HarvestBatch, batch_id)
        if batch is not None:
            self.db.refresh(batch)
        return batch

    def count_records(self, batch_id: str) -> int:
        return self.db.query(func.count(SourceRecord.id)).filter(SourceRecord.batch_id == batch_id).scalar() or 0

    def list_records(self, batch_id: str) -> list[SourceRecord]:
        return (
            self.db.query(SourceRecord)
            .filter(SourceRecord.batch_id == batch_id)
            .order_by(desc(SourceRecord.scraped_at))
            .all()
        )

    def list_batches(self, limit: int = 50) -> list[tuple[HarvestBatch, int]]:
        counts = (
            self.db.query(SourceRecord.batch_id, func.count(SourceRecord.id).label("n"))
            .group_by(SourceRecord.batch_id)
            .subquery()
        )
        rows = (
            self.db.query(HarvestBatch, counts.c.n)
            .outerjoin(counts, HarvestBatch.id == counts.c.batch_id)
            .order_by(desc(HarvestBatch.created_at))
            .limit(limit)
            .all()
        )
        return [(batch, int(n or 0)) for batch, n in rows]
