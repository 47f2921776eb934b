"""Unit tests for LeaderboardEntry and ScoreRecord entities."""

from datetime import datetime, timezone
from uuid import UUID

import pytest

from domain.kiosk.core.entities import LeaderboardEntry, ScoreRecord
from domain.kiosk.core.exceptions import InvalidLeaderboardEntryError
from domain.kiosk.core.value_objects import DishKind, MealPeriod


class TestLeaderboardEntry:
    """Test LeaderboardEntry invariants."""

    def test_valid_entry(self):
        entry = LeaderboardEntry("ABC", 75)

        assert entry.initials == "ABC"
        assert entry.created_at.tzinfo is not None

    @pytest.mark.parametrize("initials", ["AB", "ABCD", "A1C", "", "abc"])
    def test_invalid_initials(self, initials):
        with pytest.raises(InvalidLeaderboardEntryError):
            LeaderboardEntry(initials, 75)

    @pytest.mark.parametrize("score", [-1, 101, 50.5, True])
    def test_invalid_score(self, score):
        with pytest.raises(InvalidLeaderboardEntryError):
            LeaderboardEntry("ABC", score)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            LeaderboardEntry("AB", 75)

    def test_create_normalizes_initials(self):
        entry = LeaderboardEntry.create(" jdoe ", 88, user_id="jdoe1")

        assert entry.initials == "JDO"
        assert entry.user_id == "jdoe1"

    def test_create_rejects_short_initials(self):
        with pytest.raises(InvalidLeaderboardEntryError):
            LeaderboardEntry.create("j", 88)

    def test_identical_entries_are_equal(self):
        at = datetime(2025, 1, 1, tzinfo=timezone.utc)

        assert LeaderboardEntry("ABC", 70, at) == LeaderboardEntry("ABC", 70, at)


class TestScoreRecord:
    """Test ScoreRecord invariants."""

    def _record(self, **overrides):
        values = dict(
            user_id="jdoe1",
            meal_period=MealPeriod.LUNCH,
            score=64,
            dish_kind=DishKind.PLATE,
            weight_grams=287.0,
        )
        values.update(overrides)
        return ScoreRecord(**values)

    def test_defaults(self):
        record = self._record()

        assert isinstance(record.id, UUID)
        assert record.created_at.tzinfo is timezone.utc

    def test_unique_ids(self):
        assert self._record().id != self._record().id

    def test_empty_user_rejected(self):
        with pytest.raises(ValueError, match="user_id"):
            self._record(user_id="  ")

    def test_score_range(self):
        with pytest.raises(ValueError, match="score"):
            self._record(score=101)

    def test_naive_timestamp_rejected(self):
        with pytest.raises(ValueError, match="timezone"):
            self._record(created_at=datetime(2025, 1, 1, 12, 0))
