"""Idle ticker job.

Feeds one IdleTick per interval into the kiosk session. The session
decides what a tick means; the ticker keeps no state of its own.
"""

import logging

from application.kiosk.session import KioskSession
from domain.kiosk.session import IdleTick

logger = logging.getLogger(__name__)


class IdleTickerJob:
    """Scheduled job enqueuing IdleTick events."""

    def __init__(self, session: KioskSession):
        self._session = session
        self.ticks = 0

    async def run(self) -> None:
        """Enqueue one tick."""
        self.ticks += 1
        await self._session.submit(IdleTick())
