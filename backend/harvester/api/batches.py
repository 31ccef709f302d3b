from __future__ import annotations
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from harvester.core.config import settings
from harvester.db.database import get_db
from harvester.schemas.batch import BatchCreate, BatchStartResponse, BatchSummaryOut
from harvester.schemas.source_record import BatchResultsOut, SourceRecordOut
from harvester.services import harvest_service
from harvester.services.harvest_service import InvalidInputError

router = APIRouter(prefix="/batches", tags=["batches"])


@router.post("", status_code=202, response_model=BatchStartResponse)
def create_batch(body: BatchCreate, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    credential = body.api_key or settings.firecrawl_api_key
    if not credential:
        raise HTTPException(status_code=400, detail="scraping provider api key not configured")
    try:
        handle = harvest_service.start_batch(db, body.job_titles)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    background_tasks.add_task(harvest_service.run_batch_in_background, handle, credential)
    return BatchStartResponse(batch_id=handle.batch_id, total_sources=handle.total_sources, status="processing")


@router.get("", response_model=list[BatchSummaryOut])
def list_batches(
    limit: int = Query(default=settings.batch_list_limit, ge=1, le=settings.batch_list_limit),
    db: Session = Depends(get_db),
):
    rows = harvest_service.list_batches(db, limit)
    data = []
    for batch, count in rows:
        summary = BatchSummaryOut.model_validate(batch)
        summary.contact_data_count = count
        data.append(summary)
    return data


@router.get("/{batch_id}", response_model=BatchResultsOut)
def get_batch(batch_id: str, db: Session = Depends(get_db)):
    batch = harvest_service.get_batch(db, batch_id)
    if not batch:
        raise HTTPException(status_code=404, detail="batch not found")
    return {"batch": batch, "records": harvest_service.list_records(db, batch_id)}


@router.get("/{batch_id}/records", response_model=list[SourceRecordOut])
def get_batch_records(batch_id: str, db: Session = Depends(get_db)):
    if not harvest_service.get_batch(db, batch_id):
        raise HTTPException(status_code=404, detail="batch not found")
    return harvest_service.list_records(db, batch_id)
