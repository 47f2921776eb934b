"""Leaderboard ranking.

Ordering contract (shared with every leaderboard store):
- score descending
- ties broken by created_at ascending (earlier submission ranks higher)
- bounded to the top LEADERBOARD_SIZE entries; dropped entries never return
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from ..core.entities.leaderboard_entry import LeaderboardEntry

LEADERBOARD_SIZE = 10
MIN_LEADERBOARD_SCORE = 50


def rank_key(entry: LeaderboardEntry) -> Tuple[int, datetime]:
    """Sort key implementing the leaderboard ordering."""
    return (-entry.score, entry.created_at)


def rank_entries(
    entries: Iterable[LeaderboardEntry],
    limit: int = LEADERBOARD_SIZE,
) -> List[LeaderboardEntry]:
    """Order entries by rank and keep the top ``limit``.

    The sort is stable: entries equal on (score, created_at) keep their
    incoming order.
    """
    return sorted(entries, key=rank_key)[:limit]


def insert(
    current: Sequence[LeaderboardEntry],
    new_entry: LeaderboardEntry,
    limit: int = LEADERBOARD_SIZE,
) -> List[LeaderboardEntry]:
    """Add an entry and return the new ranked, truncated leaderboard.

    ``current`` is not modified. Repeated identical inserts add one row each.

    Args:
        current: Existing leaderboard
        new_entry: Entry being submitted
        limit: Board size

    Returns:
        List[LeaderboardEntry]: New leaderboard, at most ``limit`` entries
    """
    return rank_entries([*current, new_entry], limit=limit)


def rank_preview(
    score: int,
    current: Iterable[LeaderboardEntry],
    created_at: Optional[datetime] = None,
) -> int:
    """1-based rank a score would receive if inserted now.

    Counts entries with a strictly higher score plus equal-score entries
    submitted no later than the prospective entry. Without ``created_at``
    the prospective entry is the newest, so every equal-score entry ranks
    ahead of it. The result equals the entry's position after ``insert``
    (it can exceed the board size, meaning the entry would be dropped).

    Args:
        score: Prospective score
        current: Leaderboard before insertion (not modified)
        created_at: Prospective submission time

    Returns:
        int: Rank starting at 1
    """
    ahead = 0
    for entry in current:
        if entry.score > score:
            ahead += 1
        elif entry.score == score and (created_at is None or entry.created_at <= created_at):
            ahead += 1
    return ahead + 1


def qualifies_for_leaderboard(score: int, min_score: int = MIN_LEADERBOARD_SCORE) -> bool:
    """True if a score is high enough to be submitted."""
    return score >= min_score


@dataclass(frozen=True)
class LeaderboardStats:
    """Summary of a leaderboard snapshot.

    Attributes:
        total_entries: Number of entries
        average_score: Mean score, rounded half-up
        highest_score: Best score (0 when empty)
        lowest_score: Worst score (0 when empty)
        top_entries: First LEADERBOARD_SIZE entries in rank order
    """

    total_entries: int
    average_score: int
    highest_score: int
    lowest_score: int
    top_entries: List[LeaderboardEntry] = field(default_factory=list)


def leaderboard_stats(entries: Iterable[LeaderboardEntry]) -> LeaderboardStats:
    """Compute summary statistics for a set of entries."""
    ranked = sorted(entries, key=rank_key)
    if not ranked:
        return LeaderboardStats(0, 0, 0, 0, [])

    scores = [e.score for e in ranked]
    average = int(sum(scores) / len(scores) + 0.5)
    return LeaderboardStats(
        total_entries=len(ranked),
        average_score=average,
        highest_score=max(scores),
        lowest_score=min(scores),
        top_entries=ranked[:LEADERBOARD_SIZE],
    )
