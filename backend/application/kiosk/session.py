"""KioskSession - serialized owner of the session state machine.

Three producers feed the session: the scale transport, the idle ticker
and user commands. Producers running outside a coroutine enqueue events
with ``submit_nowait``; a single worker task drains the queue. Coroutines
may call ``dispatch`` directly: each step is synchronous and runs to
completion on the event loop, so transitions never interleave.

Side effects run as background tasks after the state update. A failing
effect is logged and never rolls back the transition.
"""

import asyncio
import logging
from typing import List, Optional, Set

from domain.kiosk.session import (
    IdleTick,
    SessionContext,
    SessionEvent,
    SessionState,
    SideEffect,
    StepResult,
    step,
)

from application.kiosk.effect_executor import SessionEffectExecutor

logger = logging.getLogger(__name__)


class KioskSession:
    """Runs the kiosk state machine for one physical kiosk."""

    def __init__(
        self,
        effect_executor: Optional[SessionEffectExecutor] = None,
        state: SessionState = SessionState.WELCOME,
        context: Optional[SessionContext] = None,
    ):
        """
        Initialize session.

        Args:
            effect_executor: Executor for persistence intents (None drops them)
            state: Initial state
            context: Initial context
        """
        self._executor = effect_executor
        self._state = state
        self._context = context or SessionContext()
        self._queue: "asyncio.Queue[SessionEvent]" = asyncio.Queue()
        self._worker: Optional[asyncio.Task] = None
        self._effect_tasks: Set[asyncio.Task] = set()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def context(self) -> SessionContext:
        return self._context

    @property
    def is_running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def dispatch(self, event: SessionEvent) -> StepResult:
        """
        Apply one event and schedule its side effects.

        Must be called from the event loop thread.

        Args:
            event: Session event

        Returns:
            StepResult: Outcome of the transition
        """
        previous = self._state
        result = step(self._state, self._context, event)
        self._state = result.state
        self._context = result.context

        level = logging.DEBUG if isinstance(event, IdleTick) else logging.INFO
        if previous is not result.state:
            level = logging.INFO
        logger.log(
            level,
            "Session event applied",
            extra={
                "event": event.name,
                "from_state": previous.value,
                "to_state": result.state.value,
                "effects": [effect.name for effect in result.effects],
            },
        )

        for effect in result.effects:
            self._schedule(effect)
        return result

    def submit_nowait(self, event: SessionEvent) -> None:
        """Enqueue an event for the worker (callable from plain callbacks)."""
        self._queue.put_nowait(event)

    async def submit(self, event: SessionEvent) -> None:
        await self._queue.put(event)

    async def start(self) -> None:
        """Start the worker draining the event queue."""
        if self.is_running:
            return
        self._worker = asyncio.create_task(self._run(), name="kiosk-session")
        logger.info("Kiosk session started", extra={"state": self._state.value})

    async def stop(self) -> None:
        """Stop the worker and wait for pending side effects."""
        if self._worker is not None:
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass
            self._worker = None
        await self.drain_effects()
        logger.info("Kiosk session stopped", extra={"state": self._state.value})

    async def join(self) -> None:
        """Wait until every queued event has been applied."""
        await self._queue.join()

    async def drain_effects(self) -> None:
        """Wait for all scheduled side effects to finish."""
        while self._effect_tasks:
            await asyncio.gather(*list(self._effect_tasks), return_exceptions=True)

    def pending_effects(self) -> List[asyncio.Task]:
        return list(self._effect_tasks)

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                self.dispatch(event)
            except Exception as e:
                logger.error(
                    "Session event failed",
                    extra={"event": event.name, "error": str(e)},
                    exc_info=True,
                )
            finally:
                self._queue.task_done()

    def _schedule(self, effect: SideEffect) -> None:
        if self._executor is None:
            logger.warning("No effect executor, dropping effect", extra={"effect": effect.name})
            return
        task = asyncio.create_task(self._execute(effect))
        self._effect_tasks.add(task)
        task.add_done_callback(self._effect_tasks.discard)

    async def _execute(self, effect: SideEffect) -> None:
        try:
            await self._executor.execute(effect)
        except Exception as e:
            logger.error(
                "Side effect failed",
                extra={"effect": effect.name, "error": str(e)},
                exc_info=True,
            )
