import contextlib
from contextlib import asynccontextmanager
import asyncio
import logging

from app.core.config import settings
from app.core.config.scoring import get_scoring_policy
from app.storage.analysis_store import init_store, purge_old_analyses

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    # Scoring table is validated at startup.
    get_scoring_policy()
    init_store()

    stop_event = asyncio.Event()

    async def periodic_purge() -> None:
        while not stop_event.is_set():
            try:
                deleted = purge_old_analyses()
                if deleted:
                    logger.info("analysis_retention_purge deleted=%s", deleted)
            except Exception as exc:  # pragma: no cover - defensive guard
                logger.warning("analysis_retention_purge_failed: %s", exc)
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=3600)
            except asyncio.TimeoutError:
                continue

    purge_task = None
    if settings.analysis_retention_days > 0:
        purge_task = asyncio.create_task(periodic_purge())
    yield
    stop_event.set()
    if purge_task is not None and not purge_task.done():
        purge_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await purge_task
