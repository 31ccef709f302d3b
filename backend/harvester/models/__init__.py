from __future__ import annotations
from harvester.models.batch import HarvestBatch
from harvester.models.source_record import SourceRecord

__all__ = ["HarvestBatch", "SourceRecord"]
