from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from harvester.db.database import Base

STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"


class HarvestBatch(Base):
    __tablename__ = "harvest_batches"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    job_titles: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    status: Mapped[str] = mapped_column(String(16), default=STATUS_PROCESSING, nullable=False)
    total_sources: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    completed_sources: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    finished_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
