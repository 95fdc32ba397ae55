# ludoteca/tasks/library_refresh.py
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ludoteca.config import settings
from ludoteca.library.registry import SessionRegistry
from ludoteca.utils.logging import log_info, log_success


async def refresh_sessions(registry: SessionRegistry) -> dict:
    """Reload every open session so borrows made elsewhere show up."""

    sessions = registry.active()
    failed = 0
    for session in sessions:
        state = await session.load()
        if state.error or state.no_access:
            failed += 1

    log_success(f"🔄 Refreshed {len(sessions)} sessions ({failed} with errors)")
    return {"status": "done", "sessions": len(sessions), "failed": failed}


def setup_refresh_scheduler(registry: SessionRegistry) -> Optional[AsyncIOScheduler]:
    minutes = settings.REFRESH_INTERVAL_MINUTES
    if minutes <= 0:
        log_info("🕒 Library refresh disabled (REFRESH_INTERVAL_MINUTES=0)")
        return None

    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        refresh_sessions,
        IntervalTrigger(minutes=minutes),
        args=[registry],
        id="refresh_library_sessions",
        replace_existing=True,
    )
    scheduler.start()
    log_info(f"🕒 Scheduler started: library sessions refresh every {minutes} min.")
    return scheduler
