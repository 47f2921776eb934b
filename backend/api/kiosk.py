"""REST API for the food waste kiosk.

Thin HTTP layer over the kiosk session: every route either dispatches an
event / runs a command handler, or reads the current snapshot.
"""

import logging
from datetime import datetime
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from api.dependencies import KioskServices, get_kiosk_services
from application.kiosk.commands import IdentifyUserCommand, SubmitInitialsCommand
from application.kiosk.queries import GetLeaderboardQuery, GetUserScoresQuery, RankPreviewQuery
from domain.kiosk.core.entities.leaderboard_entry import LeaderboardEntry
from domain.kiosk.core.entities.score_record import ScoreRecord
from domain.kiosk.core.exceptions.domain_errors import (
    InvalidLeaderboardEntryError,
    NoActiveScoreError,
    ScoreNotQualifiedError,
    WeightNotReadyError,
)
from domain.kiosk.core.value_objects.dish_kind import DishKind
from domain.kiosk.core.value_objects.meal_period import MealPeriod, next_meal_info
from domain.kiosk.core.value_objects.score_comparison import ScoreComparison
from domain.kiosk.core.value_objects.weight_sample import WeightSample
from domain.kiosk.scoring import is_stable, is_weight_ready
from domain.kiosk.session import (
    Back,
    ErrorOccurred,
    Exit,
    IdleReset,
    ReadingUpdate,
    SelectDish,
    SessionEvent,
    SetDebugWeight,
    ShowLeaderboard,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["kiosk"])


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class LeaderboardEntryModel(BaseModel):
    initials: str
    score: int
    created_at: datetime
    meal_period: Optional[MealPeriod] = None

    @classmethod
    def from_entry(cls, entry: LeaderboardEntry) -> "LeaderboardEntryModel":
        return cls(
            initials=entry.initials,
            score=entry.score,
            created_at=entry.created_at,
            meal_period=entry.meal_period,
        )


class ComparisonModel(BaseModel):
    is_higher: bool
    is_lower: bool
    has_comparison: bool


class NextMealModel(BaseModel):
    meal_period: MealPeriod
    minutes_until_start: int
    is_currently_meal_time: bool
    time_until_start: str


class SessionSnapshot(BaseModel):
    """Everything the kiosk screen renders."""

    state: str
    user_id: Optional[str] = None
    treatment_group: Optional[str] = None
    dish_kind: Optional[DishKind] = None
    current_score: Optional[int] = None
    previous_score: Optional[int] = None
    comparison: Optional[ComparisonModel] = None
    latest_weight_grams: float = 0.0
    is_stable: bool = False
    weight_ready: bool = False
    idle_countdown: int
    show_idle_warning: bool
    error_message: Optional[str] = None
    score_persisted: bool = False
    meal_period: MealPeriod
    next_meal: NextMealModel
    leaderboard: List[LeaderboardEntryModel] = Field(default_factory=list)


class SessionEventRequest(BaseModel):
    """User interaction or operator input."""

    type: Literal[
        "select_dish",
        "back",
        "exit",
        "show_leaderboard",
        "idle_reset",
        "reading",
        "error",
        "debug_weight",
    ]
    dish_kind: Optional[DishKind] = None
    grams: Optional[float] = None
    stable: Optional[bool] = None
    message: Optional[str] = None


class IdentifyRequest(BaseModel):
    user_id: str


class IdentifyResponse(BaseModel):
    user_id: str
    allowed: bool
    treatment_group: Optional[str] = None
    previous_score: Optional[int] = None
    message: Optional[str] = None
    session: SessionSnapshot


class InitialsRequest(BaseModel):
    initials: str = Field(..., min_length=1, max_length=8)


class InitialsResponse(BaseModel):
    entry: LeaderboardEntryModel
    rank: int
    stored: bool
    leaderboard: List[LeaderboardEntryModel]


class RankPreviewResponse(BaseModel):
    score: int
    rank: int
    qualifies: bool
    on_board: bool


class LeaderboardStatsResponse(BaseModel):
    total_entries: int
    average_score: int
    highest_score: int
    lowest_score: int
    top_entries: List[LeaderboardEntryModel]


class ValidateIdentityResponse(BaseModel):
    user_id: str
    allowed: bool


class ScoreRecordModel(BaseModel):
    id: str
    user_id: str
    meal_period: MealPeriod
    score: int
    dish_kind: DishKind
    weight_grams: float
    created_at: datetime

    @classmethod
    def from_record(cls, record: ScoreRecord) -> "ScoreRecordModel":
        return cls(
            id=str(record.id),
            user_id=record.user_id,
            meal_period=record.meal_period,
            score=record.score,
            dish_kind=record.dish_kind,
            weight_grams=record.weight_grams,
            created_at=record.created_at,
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def build_snapshot(services: KioskServices, now: Optional[datetime] = None) -> SessionSnapshot:
    """Render the session state for the kiosk screen."""
    session = services.session
    ctx = session.context
    settings = services.settings
    moment = now or datetime.now()

    comparison = None
    if ctx.current_score is not None:
        c = ScoreComparison.between(ctx.current_score, ctx.previous_score)
        comparison = ComparisonModel(
            is_higher=c.is_higher, is_lower=c.is_lower, has_comparison=c.has_comparison
        )

    info = next_meal_info(moment)
    return SessionSnapshot(
        state=session.state.value,
        user_id=ctx.user_id,
        treatment_group=ctx.treatment_group.value if ctx.treatment_group else None,
        dish_kind=ctx.dish_kind,
        current_score=ctx.current_score,
        previous_score=ctx.previous_score,
        comparison=comparison,
        latest_weight_grams=ctx.latest_weight(),
        is_stable=is_stable(
            ctx.readings,
            std_dev_threshold=settings.stability_threshold,
            window_ms=settings.stability_window_ms,
        ),
        weight_ready=is_weight_ready(
            ctx.readings,
            std_dev_threshold=settings.stability_threshold,
            window_ms=settings.stability_window_ms,
        ),
        idle_countdown=ctx.idle_countdown,
        show_idle_warning=ctx.show_idle_warning,
        error_message=ctx.error_message,
        score_persisted=ctx.score_persisted,
        meal_period=MealPeriod.current(moment),
        next_meal=NextMealModel(
            meal_period=info.next_meal,
            minutes_until_start=info.minutes_until_start,
            is_currently_meal_time=info.is_currently_meal_time,
            time_until_start=info.time_until_start(),
        ),
        leaderboard=[LeaderboardEntryModel.from_entry(e) for e in ctx.leaderboard],
    )


def to_session_event(request: SessionEventRequest) -> SessionEvent:
    """
    Map an HTTP event request to a session event.

    Raises:
        HTTPException: 422 if a required field is missing
    """
    if request.type == "select_dish":
        if request.dish_kind is None:
            raise HTTPException(status_code=422, detail="dish_kind is required")
        return SelectDish(request.dish_kind)
    if request.type == "back":
        return Back()
    if request.type == "exit":
        return Exit()
    if request.type == "show_leaderboard":
        return ShowLeaderboard()
    if request.type == "idle_reset":
        return IdleReset()
    if request.type == "reading":
        if request.grams is None:
            raise HTTPException(status_code=422, detail="grams is required")
        return ReadingUpdate(WeightSample.now(request.grams, stable=request.stable))
    if request.type == "error":
        return ErrorOccurred(request.message or "Unexpected error")
    return SetDebugWeight(request.grams)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/session", response_model=SessionSnapshot)
async def get_session(
    services: KioskServices = Depends(get_kiosk_services),
) -> SessionSnapshot:
    return build_snapshot(services)


@router.post("/session/events", response_model=SessionSnapshot)
async def post_session_event(
    request: SessionEventRequest,
    services: KioskServices = Depends(get_kiosk_services),
) -> SessionSnapshot:
    """Apply a user interaction to the session and return the new snapshot."""
    event = to_session_event(request)
    services.session.dispatch(event)
    return build_snapshot(services)


@router.post("/session/identify", response_model=IdentifyResponse)
async def identify(
    request: IdentifyRequest,
    services: KioskServices = Depends(get_kiosk_services),
) -> IdentifyResponse:
    """Identify the user; refused with 409 until a dish weight has settled."""
    try:
        result = await services.identify_user.handle(IdentifyUserCommand(request.user_id))
    except WeightNotReadyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return IdentifyResponse(
        user_id=result.user_id,
        allowed=result.allowed,
        treatment_group=result.treatment_group.value if result.treatment_group else None,
        previous_score=result.previous_score,
        message=result.message,
        session=build_snapshot(services),
    )


@router.post("/session/initials", response_model=InitialsResponse)
async def submit_initials(
    request: InitialsRequest,
    services: KioskServices = Depends(get_kiosk_services),
) -> InitialsResponse:
    """Put the current score on the leaderboard."""
    try:
        result = await services.submit_initials.handle(SubmitInitialsCommand(request.initials))
    except NoActiveScoreError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (ScoreNotQualifiedError, InvalidLeaderboardEntryError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return InitialsResponse(
        entry=LeaderboardEntryModel.from_entry(result.entry),
        rank=result.rank,
        stored=result.stored,
        leaderboard=[
            LeaderboardEntryModel.from_entry(e) for e in services.session.context.leaderboard
        ],
    )


@router.get("/leaderboard", response_model=List[LeaderboardEntryModel])
async def get_leaderboard(
    limit: int = Query(10, ge=1, le=100),
    refresh: bool = Query(True),
    services: KioskServices = Depends(get_kiosk_services),
) -> List[LeaderboardEntryModel]:
    entries = await services.leaderboard.handle(GetLeaderboardQuery(limit=limit, refresh=refresh))
    return [LeaderboardEntryModel.from_entry(e) for e in entries]


@router.get("/leaderboard/rank-preview", response_model=RankPreviewResponse)
async def get_rank_preview(
    score: int = Query(..., ge=0, le=100),
    services: KioskServices = Depends(get_kiosk_services),
) -> RankPreviewResponse:
    preview = await services.leaderboard.preview(RankPreviewQuery(score=score))
    return RankPreviewResponse(
        score=preview.score,
        rank=preview.rank,
        qualifies=preview.qualifies,
        on_board=preview.on_board,
    )


@router.get("/leaderboard/stats", response_model=LeaderboardStatsResponse)
async def get_leaderboard_stats(
    services: KioskServices = Depends(get_kiosk_services),
) -> LeaderboardStatsResponse:
    stats = await services.leaderboard.stats()
    return LeaderboardStatsResponse(
        total_entries=stats.total_entries,
        average_score=stats.average_score,
        highest_score=stats.highest_score,
        lowest_score=stats.lowest_score,
        top_entries=[LeaderboardEntryModel.from_entry(e) for e in stats.top_entries],
    )


@router.post("/identity/validate", response_model=ValidateIdentityResponse)
async def validate_identity(
    request: IdentifyRequest,
    services: KioskServices = Depends(get_kiosk_services),
) -> ValidateIdentityResponse:
    """Check an id without touching the session."""
    user_id = request.user_id.strip().lower()
    try:
        allowed = await services.identity_validator.is_allowed(user_id)
    except Exception as e:
        logger.error(
            "Identity validation failed",
            extra={"user_id": user_id, "error": str(e)},
            exc_info=True,
        )
        raise HTTPException(status_code=503, detail="Identity service unavailable")
    return ValidateIdentityResponse(user_id=user_id, allowed=allowed)


@router.get("/scores", response_model=List[ScoreRecordModel])
async def get_scores(
    user_id: str = Query(..., min_length=1),
    meal_period: Optional[MealPeriod] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    services: KioskServices = Depends(get_kiosk_services),
) -> List[ScoreRecordModel]:
    records = await services.user_scores.handle(
        GetUserScoresQuery(user_id=user_id, meal_period=meal_period, limit=limit)
    )
    return [ScoreRecordModel.from_record(r) for r in records]
