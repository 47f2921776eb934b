"""Shared fixtures for kiosk application tests."""

from datetime import datetime

import pytest

from domain.kiosk.core.value_objects import DishKind, TreatmentGroup, WeightSample
from domain.kiosk.session import IdentifyValid, ReadingUpdate, SelectDish
from infrastructure.persistence.in_memory import InMemoryLeaderboardStore, InMemoryScoreStore

from application.kiosk.effect_executor import SessionEffectExecutor
from application.kiosk.session import KioskSession

LUNCH_TIME = datetime(2025, 1, 1, 12, 0)


@pytest.fixture
def clock():
    return lambda: LUNCH_TIME


@pytest.fixture
def score_store():
    return InMemoryScoreStore()


@pytest.fixture
def leaderboard_store():
    return InMemoryLeaderboardStore()


@pytest.fixture
def session(score_store, clock):
    return KioskSession(SessionEffectExecutor(score_store, clock=clock))


@pytest.fixture
def play_dish():
    """Drive a session to the score screen (treatment) or thank-you (control)."""

    def _play(
        session: KioskSession,
        grams: float,
        user_id: str = "jdoe1",
        group: TreatmentGroup = TreatmentGroup.TREATMENT,
        dish: DishKind = DishKind.PLATE,
    ) -> None:
        session.dispatch(IdentifyValid(user_id, group))
        session.dispatch(ReadingUpdate(WeightSample.now(grams)))
        session.dispatch(SelectDish(dish))

    return _play


@pytest.fixture
def place_dish():
    """Put a settled, non-zero weight on the scale of a session."""

    def _place(session: KioskSession, grams: float = 300.0) -> None:
        for _ in range(3):
            session.dispatch(ReadingUpdate(WeightSample.now(grams, stable=True)))

    return _place
