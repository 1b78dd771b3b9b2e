"""
APScheduler setup for alarm timers.

Timers live only in memory: jobs are lost on restart.
"""

import logging
from typing import Optional

from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.schedulers.asyncio import AsyncIOScheduler

logger = logging.getLogger(__name__)


def create_scheduler(timezone: Optional[str] = None) -> AsyncIOScheduler:
    """
    Create an in-memory scheduler for alarm jobs.

    Args:
        timezone: Optional scheduler timezone name (defaults to local)

    Returns:
        Unstarted AsyncIOScheduler
    """
    options = {"jobstores": {"default": MemoryJobStore()}}
    if timezone:
        options["timezone"] = timezone

    logger.info("Scheduler using in-memory backend (single instance mode)")
    return AsyncIOScheduler(**options)


def shutdown_scheduler(scheduler: AsyncIOScheduler) -> None:
    """Shutdown the scheduler without waiting for running jobs."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
