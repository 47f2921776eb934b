"""
APScheduler configuration and management.

Provides centralized scheduler configuration for the kiosk background
jobs (idle ticker).
"""

import logging
from typing import Any, Dict, List, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .idle_ticker import IdleTickerJob

logger = logging.getLogger(__name__)

IDLE_TICK_JOB_ID = "idle_tick"


class SchedulerManager:
    """
    Manages APScheduler lifecycle and job registration.

    One manager per process, handling initialization, job registration
    and shutdown.
    """

    def __init__(self) -> None:
        """Initialize scheduler manager."""
        self.scheduler: Optional[AsyncIOScheduler] = None
        self._idle_job: Optional[IdleTickerJob] = None

    def initialize(self, idle_job: IdleTickerJob, interval_seconds: float = 1.0) -> None:
        """
        Initialize and configure scheduler with jobs.

        Args:
            idle_job: Idle ticker job instance
            interval_seconds: Tick interval
        """
        if self.scheduler is not None:
            logger.warning("Scheduler already initialized")
            return

        self._idle_job = idle_job

        self.scheduler = AsyncIOScheduler(
            job_defaults={
                "coalesce": True,  # late ticks collapse into one
                "max_instances": 1,
                "misfire_grace_time": 1,
            },
        )
        self._register_idle_job(interval_seconds)

        logger.info("Scheduler initialized successfully")

    def _register_idle_job(self, interval_seconds: float) -> None:
        if self.scheduler is None or self._idle_job is None:
            raise RuntimeError("Scheduler not initialized")

        self.scheduler.add_job(
            self._idle_job.run,
            trigger=IntervalTrigger(seconds=interval_seconds),
            id=IDLE_TICK_JOB_ID,
            name="Kiosk idle tick",
            replace_existing=True,
        )

        logger.info(f"Idle tick job registered every {interval_seconds}s")

    def start(self) -> None:
        """Start scheduler (begin executing jobs)."""
        if self.scheduler is None:
            raise RuntimeError("Scheduler not initialized")

        if self.scheduler.running:
            logger.warning("Scheduler already running")
            return

        self.scheduler.start()
        logger.info("Scheduler started")

    def shutdown(self, wait: bool = True) -> None:
        """
        Shutdown scheduler gracefully.

        Args:
            wait: If True, wait for running jobs to complete
        """
        if self.scheduler is None:
            logger.warning("Scheduler not initialized")
            return

        if not self.scheduler.running:
            logger.warning("Scheduler not running")
            return

        self.scheduler.shutdown(wait=wait)
        logger.info(f"Scheduler shutdown (wait={wait})")

    def get_jobs(self) -> List[Dict[str, Any]]:
        """Get list of scheduled jobs."""
        if self.scheduler is None:
            return []

        return [
            {
                "id": job.id,
                "name": job.name,
                "next_run": getattr(job, "next_run_time", None),  # unset while pending
                "trigger": str(job.trigger),
            }
            for job in self.scheduler.get_jobs()
        ]
