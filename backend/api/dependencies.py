"""Kiosk service wiring and FastAPI dependencies.

Builds the session and its command/query handlers from already created
ports. Environment handling stays in the infrastructure factories.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from fastapi import Request

from application.kiosk.commands import IdentifyUserCommandHandler, SubmitInitialsCommandHandler
from application.kiosk.effect_executor import SessionEffectExecutor
from application.kiosk.queries import GetLeaderboardQueryHandler, GetUserScoresQueryHandler
from application.kiosk.session import KioskSession
from domain.kiosk.core.ports.identity_validator import IIdentityValidator
from domain.kiosk.core.ports.leaderboard_store import ILeaderboardStore
from domain.kiosk.core.ports.score_store import IScoreStore
from infrastructure.config import KioskSettings


@dataclass
class KioskServices:
    """Everything the HTTP layer and the background jobs need."""

    settings: KioskSettings
    session: KioskSession
    score_store: IScoreStore
    leaderboard_store: ILeaderboardStore
    identity_validator: IIdentityValidator
    identify_user: IdentifyUserCommandHandler
    submit_initials: SubmitInitialsCommandHandler
    leaderboard: GetLeaderboardQueryHandler
    user_scores: GetUserScoresQueryHandler

    @classmethod
    def build(
        cls,
        settings: KioskSettings,
        score_store: IScoreStore,
        leaderboard_store: ILeaderboardStore,
        identity_validator: IIdentityValidator,
        clock: Callable[[], datetime] = datetime.now,
    ) -> "KioskServices":
        session = KioskSession(SessionEffectExecutor(score_store, clock=clock))
        return cls(
            settings=settings,
            session=session,
            score_store=score_store,
            leaderboard_store=leaderboard_store,
            identity_validator=identity_validator,
            identify_user=IdentifyUserCommandHandler(
                session,
                identity_validator,
                score_store,
                treatment_split_enabled=settings.treatment_split_enabled,
                clock=clock,
                stability_threshold=settings.stability_threshold,
                stability_window_ms=settings.stability_window_ms,
            ),
            submit_initials=SubmitInitialsCommandHandler(
                session,
                leaderboard_store,
                score_store,
                min_score=settings.min_leaderboard_score,
                leaderboard_size=settings.leaderboard_size,
                clock=clock,
            ),
            leaderboard=GetLeaderboardQueryHandler(
                session,
                leaderboard_store,
                min_score=settings.min_leaderboard_score,
                leaderboard_size=settings.leaderboard_size,
            ),
            user_scores=GetUserScoresQueryHandler(score_store),
        )


def get_kiosk_services(request: Request) -> KioskServices:
    """FastAPI dependency: services built by the application lifespan."""
    services = getattr(request.app.state, "kiosk", None)
    if services is None:
        raise RuntimeError("Kiosk services not initialized")
    return services
