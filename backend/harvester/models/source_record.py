from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from harvester.db.database import Base


class SourceRecord(Base):
    __tablename__ = "source_records"
    __table_args__ = (Index("ix_source_records_batch_scraped", "batch_id", "scraped_at"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    batch_id: Mapped[str] = mapped_column(ForeignKey("harvest_batches.id"), nullable=False)
    source_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    domain: Mapped[str] = mapped_column(String(256), default="", nullable=False)
    page_title: Mapped[str] = mapped_column(String(1024), default="Unknown Page", nullable=False)
    emails: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    contacts: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    job_postings: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    external_urls: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    redirect_chain: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    processing_time_ms: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    scraped_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
