from __future__ import annotations
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from harvester.core.config import settings
from harvester.crawlers.base import HarvestedSource
from harvester.crawlers.deep_search import PageFetcher, expand
from harvester.crawlers.scrape_client import ScrapeClient
from harvester.crawlers.url_generator import generate_urls
from harvester.db.database import SessionLocal
from harvester.models.batch import HarvestBatch
from harvester.models.source_record import SourceRecord
from harvester.services.result_store import ResultStore

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    pass


@dataclass
class BatchHandle:
    batch_id: str
    total_sources: int
    urls: list[str] = field(default_factory=list)


class BatchProgress:
    """Single point of synchronization for a batch's progress counter.

    ``increment`` advances the counter by one per attempted URL and
    ``try_seal_complete`` performs the terminal transition at most once.
    """

    def __init__(self, store: ResultStore, batch_id: str, total: int):
        self._store = store
        self._batch_id = batch_id
        self._total = total
        self._completed = 0
        self._sealed = False
        self._lock = threading.Lock()

    @property
    def completed(self) -> int:
        return self._completed

    def increment(self) -> int:
        with self._lock:
            if self._completed >= self._total:
                raise RuntimeError(f"batch {self._batch_id} already counted {self._total} sources")
            self._completed += 1
            completed = self._completed
            try:
                self._store.increment_progress(self._batch_id)
            except SQLAlchemyError as exc:
                logger.error("[harvest] progress write failed | batch=%s completed=%d error=%s", self._batch_id, completed, exc)
            return completed

    def try_seal_complete(self) -> bool:
        with self._lock:
            if self._sealed or self._completed < self._total:
                return False
            self._sealed = True
            return self._store.finalize(self._batch_id, self._completed)


def _clean_titles(job_titles: list[str] | None) -> list[str]:
    titles = [t.strip() for t in (job_titles or []) if isinstance(t, str) and t.strip()]
    if not titles:
        raise InvalidInputError("job_titles must contain at least one non-blank title")
    return titles


def start_batch(db: Session, job_titles: list[str]) -> BatchHandle:
    titles = _clean_titles(job_titles)
    store = ResultStore(db)
    batch = store.create_batch(titles)

    urls: list[str] = []
    for title in titles:
        urls.extend(generate_urls(title))
    store.set_total_sources(batch.id, len(urls))

    logger.info("[harvest] batch created | batch=%s titles=%d sources=%d", batch.id, len(titles), len(urls))
    return BatchHandle(batch_id=batch.id, total_sources=len(urls), urls=urls)


def _record_outcome(store: ResultStore, batch_id: str, url: str, future: Future) -> bool:
    try:
        source: HarvestedSource | None = future.result()
    except Exception:  # noqa: BLE001
        logger.exception("[harvest] source failed | batch=%s url=%s", batch_id, url)
        return False

    if source is None:
        return False
    if not source.emails:
        logger.info("[harvest] no emails found | batch=%s url=%s", batch_id, url)
        return False

    try:
        store.append_record(batch_id, source)
    except SQLAlchemyError as exc:
        logger.error("[harvest] record dropped, write failed | batch=%s url=%s error=%s", batch_id, url, exc)
        return False

    logger.info(
        "[harvest] record saved | batch=%s url=%s emails=%d chain=%d",
        batch_id,
        url,
        len(source.emails),
        len(source.redirect_chain),
    )
    return True


def run_batch(
    db: Session,
    handle: BatchHandle,
    credential: str,
    client: PageFetcher | None = None,
    max_workers: int | None = None,
) -> dict:
    store = ResultStore(db)
    progress = BatchProgress(store, handle.batch_id, handle.total_sources)
    owned_client = None
    if client is None:
        owned_client = client = ScrapeClient(credential)

    workers = max(1, min(max_workers or settings.harvest_max_workers, len(handle.urls) or 1))
    saved = 0
    try:
        # Workers only fetch and extract; this thread is the only writer.
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="harvest") as pool:
            futures = {pool.submit(expand, url, client): url for url in handle.urls}
            for future in as_completed(futures):
                url = futures[future]
                if _record_outcome(store, handle.batch_id, url, future):
                    saved += 1
                completed = progress.increment()
                logger.debug("[harvest] progress | batch=%s %d/%d", handle.batch_id, completed, handle.total_sources)
    finally:
        if owned_client is not None:
            owned_client.close()

    if progress.try_seal_complete():
        logger.info(
            "[harvest] batch completed | batch=%s sources=%d records=%d",
            handle.batch_id,
            handle.total_sources,
            saved,
        )

    batch = store.get_batch(handle.batch_id)
    return {
        "batch_id": handle.batch_id,
        "status": batch.status if batch else None,
        "total_sources": handle.total_sources,
        "completed_sources": progress.completed,
        "contact_data_count": saved,
    }


def harvest(db: Session, job_titles: list[str], credential: str, **kwargs) -> dict:
    handle = start_batch(db, job_titles)
    return run_batch(db, handle, credential, **kwargs)


def run_batch_in_background(handle: BatchHandle, credential: str) -> None:
    db = SessionLocal()
    try:
        run_batch(db, handle, credential)
    except Exception:  # noqa: BLE001
        logger.exception("[harvest] batch runner crashed | batch=%s", handle.batch_id)
    finally:
        db.close()


def get_batch(db: Session, batch_id: str) -> HarvestBatch | None:
    return ResultStore(db).get_batch(batch_id)


def list_records(db: Session, batch_id: str) -> list[SourceRecord]:
    return ResultStore(db).list_records(batch_id)


def list_batches(db: Session, limit: int | None = None) -> list[tuple[HarvestBatch, int]]:
    return ResultStore(db).list_batches(limit or settings.batch_list_limit)
