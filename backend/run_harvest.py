from __future__ import annotations
import sys

from harvester.core.config import settings
from harvester.core.logging import configure_logging
from harvester.db.database import SessionLocal
from harvester.db.init_db import init_db
from harvester.services.harvest_service import harvest


if __name__ == "__main__":
    configure_logging(settings.log_level)
    init_db()
    db = SessionLocal()
    try:
        result = harvest(db, sys.argv[1:], settings.firecrawl_api_key)
        print(result)
    finally:
        db.close()
