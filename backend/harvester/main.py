from __future__ import annotations
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from harvester.api import batches, health
from harvester.core.config import settings
from harvester.core.logging import configure_logging
from harvester.db.init_db import init_db

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    configure_logging(settings.log_level)
    init_db()


app.include_router(health.router)
app.include_router(batches.router, prefix=settings.api_prefix)
