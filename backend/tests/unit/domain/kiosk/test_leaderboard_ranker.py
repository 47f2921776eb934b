"""Unit tests for leaderboard ranking."""

from datetime import datetime, timedelta, timezone

from domain.kiosk.core.entities.leaderboard_entry import LeaderboardEntry
from domain.kiosk.leaderboard import (
    LEADERBOARD_SIZE,
    insert,
    leaderboard_stats,
    qualifies_for_leaderboard,
    rank_entries,
    rank_preview,
)

T0 = datetime(2025, 11, 12, 12, 0, tzinfo=timezone.utc)


def entry(initials: str, score: int, minutes: int = 0) -> LeaderboardEntry:
    return LeaderboardEntry(initials, score, created_at=T0 + timedelta(minutes=minutes))


def full_board():
    return [entry("AAA", 100 - i * 5, minutes=i) for i in range(LEADERBOARD_SIZE)]


class TestInsert:
    """insert(current, new_entry)."""

    def test_sorted_by_score_desc(self):
        board = insert([entry("AAA", 60), entry("BBB", 90)], entry("CCC", 75, 1))

        assert [e.score for e in board] == [90, 75, 60]

    def test_ties_broken_by_earlier_submission(self):
        board = insert([entry("LAT", 80, minutes=10)], entry("EAR", 80, minutes=1))

        assert [e.initials for e in board] == ["EAR", "LAT"]

    def test_truncated_to_size(self):
        board = insert(full_board(), entry("NEW", 99, minutes=30))

        assert len(board) == LEADERBOARD_SIZE
        assert board[1].initials == "NEW"
        assert board[-1].score == 60

    def test_low_entry_dropped_from_full_board(self):
        board = insert(full_board(), entry("LOW", 10, minutes=30))

        assert "LOW" not in [e.initials for e in board]

    def test_input_not_modified(self):
        current = [entry("AAA", 60)]

        insert(current, entry("BBB", 90))

        assert len(current) == 1

    def test_duplicates_kept(self):
        dup = entry("AAA", 80)

        board = insert(insert([], dup), dup)

        assert len(board) == 2


class TestRankPreview:
    """rank_preview matches the post-insert position."""

    def test_empty_board(self):
        assert rank_preview(70, []) == 1

    def test_counts_higher_and_equal_scores(self):
        board = [entry("AAA", 90), entry("BBB", 80), entry("CCC", 70)]

        assert rank_preview(80, board) == 3
        assert rank_preview(85, board) == 2

    def test_matches_insert_position(self):
        board = full_board()
        for score in (100, 97, 80, 61, 55, 0):
            new = entry("NEW", score, minutes=60)
            ranked = insert(board, new, limit=len(board) + 1)

            assert ranked.index(new) + 1 == rank_preview(score, board, new.created_at)

    def test_earlier_timestamp_ranks_ahead_of_later_tie(self):
        board = [entry("LAT", 80, minutes=10)]

        assert rank_preview(80, board, created_at=T0) == 1
        assert rank_preview(80, board) == 2


class TestQualificationAndStats:
    """qualifies_for_leaderboard, leaderboard_stats, rank_entries."""

    def test_minimum_score(self):
        assert qualifies_for_leaderboard(50) is True
        assert qualifies_for_leaderboard(49) is False
        assert qualifies_for_leaderboard(30, min_score=20) is True

    def test_stats(self):
        stats = leaderboard_stats([entry("AAA", 90), entry("BBB", 71), entry("CCC", 60)])

        assert stats.total_entries == 3
        assert stats.average_score == 74
        assert stats.highest_score == 90
        assert stats.lowest_score == 60
        assert stats.top_entries[0].initials == "AAA"

    def test_stats_empty(self):
        stats = leaderboard_stats([])

        assert stats.total_entries == 0
        assert stats.top_entries == []

    def test_rank_entries_limit(self):
        assert len(rank_entries(full_board(), limit=3)) == 3
