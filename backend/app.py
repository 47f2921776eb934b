from __future__ import annotations

# Standard library
import os
import logging as _logging
from contextlib import AsyncExitStack, asynccontextmanager
from pathlib import Path
from typing import Any

# Third-party
from dotenv import load_dotenv
from fastapi import FastAPI

# Local application imports
from api.dependencies import KioskServices
from api.kiosk import router as kiosk_router
from domain.kiosk.core.exceptions.domain_errors import PersistenceError, TransportError
from domain.kiosk.session import ErrorOccurred, ReadingUpdate, SetLeaderboard
from infrastructure.config import get_log_level, load_kiosk_settings
from infrastructure.identity.factory import get_identity_validator
from infrastructure.identity.http_validator import HttpIdentityValidator
from infrastructure.persistence.factory import get_leaderboard_store, get_score_store
from infrastructure.persistence.mongodb.base import MongoBaseStore
from infrastructure.scheduler import IdleTickerJob, SchedulerManager
from infrastructure.transport.factory import create_scale_transport

_env_path = Path(__file__).parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

# --- Basic logging configuration (minimal) ---
_LOG_LEVEL = get_log_level()
_logging.basicConfig(
    level=getattr(_logging, _LOG_LEVEL, _logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

# Version from env (Docker build ARG -> ENV APP_VERSION)
APP_VERSION = os.getenv("APP_VERSION", "0.0.0-dev")

__all__ = ["app"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:  # pragma: no cover
    """Application lifecycle: stores, validator, session, scale and idle ticker.

    Startup order:
    1. settings and stores (MongoDB indexes created once here)
    2. identity validator (HTTP client opened via async with)
    3. session + leaderboard snapshot
    4. scale transport and idle ticker feeding the session queue

    Shutdown runs in reverse.
    """
    logger = _logging.getLogger("startup")
    settings = load_kiosk_settings()

    logger.info(
        "startup.config",
        extra={
            "score_store": os.getenv("SCORE_STORE", "inmemory"),
            "leaderboard_store": os.getenv("LEADERBOARD_STORE", "inmemory"),
            "identity_validator": os.getenv("IDENTITY_VALIDATOR", "allowlist"),
            "scale_transport": os.getenv("SCALE_TRANSPORT", "mock"),
            "treatment_split_enabled": settings.treatment_split_enabled,
        },
    )

    async with AsyncExitStack() as stack:
        score_store = get_score_store()
        leaderboard_store = get_leaderboard_store()
        for store in (score_store, leaderboard_store):
            if isinstance(store, MongoBaseStore):
                await store.initialize()
                stack.push_async_callback(store.close)

        validator = get_identity_validator()
        if isinstance(validator, HttpIdentityValidator):
            await stack.enter_async_context(validator)

        services = KioskServices.build(settings, score_store, leaderboard_store, validator)
        session = services.session
        app.state.kiosk = services

        try:
            top = await leaderboard_store.get_top(settings.leaderboard_size)
            session.dispatch(SetLeaderboard(tuple(top)))
        except PersistenceError as e:
            logger.warning("lifespan.leaderboard_unavailable", extra={"error": str(e)})

        await session.start()
        stack.push_async_callback(session.stop)

        transport = create_scale_transport()
        transport.on_reading(lambda sample: session.submit_nowait(ReadingUpdate(sample)))
        if hasattr(transport, "on_error"):
            transport.on_error(lambda error: session.submit_nowait(ErrorOccurred(str(error))))
        try:
            await transport.connect()
            stack.push_async_callback(transport.disconnect)
        except TransportError as e:
            logger.error("lifespan.scale_unavailable", extra={"error": str(e)})
            session.dispatch(ErrorOccurred(str(e)))

        scheduler = SchedulerManager()
        scheduler.initialize(IdleTickerJob(session), interval_seconds=settings.idle_tick_seconds)
        scheduler.start()
        stack.callback(scheduler.shutdown, False)

        logger.info("lifespan.ready", extra={"status": "serving"})
        yield
        logger.info("lifespan.shutdown", extra={"status": "cleanup"})


app = FastAPI(
    title="Food Waste Kiosk",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version")
async def version() -> dict[str, str]:
    return {"version": APP_VERSION}


app.include_router(kiosk_router)
