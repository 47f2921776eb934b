"""
Scheduler infrastructure for background jobs.
"""

from .idle_ticker import IdleTickerJob
from .scheduler_config import SchedulerManager

__all__ = ["IdleTickerJob", "SchedulerManager"]
