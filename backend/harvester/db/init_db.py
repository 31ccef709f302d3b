from __future__ import annotations
from harvester.db.database import Base, engine
from harvester.models import batch, source_record  # noqa: F401


def init_db() -> None:
    Base.metadata.create_all(bind=engine)
