"""Analytics service: descriptive statistics over test history.

All functions are pure: they read the given users/tests and compute
results on demand, nothing is cached.
"""

import math
from datetime import datetime, timedelta, timezone

from domain.model.analytics import (
    Consistency,
    LeaderboardEntry,
    PlatformStats,
    UserAnalytics,
    WeeklyPoint,
)
from domain.model.mock_test import MockTest
from domain.model.user import User
from port.mock_test_ledger import MockTestLedger
from utils.scoring import round_half_up

RECENT_WINDOW = 3
RECENT_TESTS_LIMIT = 5
WEEKLY_WINDOW = timedelta(days=7)
LEADERBOARD_LIMIT = 20
RECENT_ACTIVITY_LIMIT = 10


def _mean(scores: list[int]) -> float:
    return sum(scores) / len(scores)


def calculate_improvement(tests: list[MockTest]) -> int:
    """Rounded difference between the mean of the last 3 scores and the mean of the ones before.

    Returns 0 with fewer than 2 tests. With 2 or 3 tests the earlier window
    is the first test alone, overlapping the recent window.
    """
    if len(tests) < 2:
        return 0

    recent = tests[-RECENT_WINDOW:]
    earlier = tests[:max(1, len(tests) - RECENT_WINDOW)]
    if not earlier:
        return 0

    recent_avg = _mean([t.score for t in recent])
    earlier_avg = _mean([t.score for t in earlier])
    return round_half_up(recent_avg - earlier_avg)


def calculate_consistency(tests: list[MockTest]) -> str:
    """Label score spread by the population standard deviation."""
    if len(tests) < 3:
        return Consistency.INSUFFICIENT_DATA

    scores = [t.score for t in tests]
    mean = _mean(scores)
    variance = sum((s - mean) ** 2 for s in scores) / len(scores)
    std_dev = math.sqrt(variance)

    if std_dev < 5:
        return Consistency.VERY_CONSISTENT
    if std_dev < 10:
        return Consistency.CONSISTENT
    if std_dev < 15:
        return Consistency.MODERATELY_CONSISTENT
    return Consistency.NEEDS_FOCUS


def calculate_weekly_progress(tests: list[MockTest], now: datetime | None = None) -> list[WeeklyPoint]:
    """Tests taken in the trailing 7 days, in submission order.

    Empty when the user has fewer than 2 tests overall.
    """
    if len(tests) < 2:
        return []

    cutoff = (now or datetime.now(timezone.utc)) - WEEKLY_WINDOW
    return [
        WeeklyPoint(date=t.date, score=t.score, test_name=t.test_name)
        for t in tests
        if t.date >= cutoff
    ]


def build_user_analytics(user: User, now: datetime | None = None) -> UserAnalytics:
    tests = user.mock_tests
    return UserAnalytics(
        total_tests=user.total_tests,
        average_score=user.average_score,
        best_score=user.best_score,
        recent_tests=list(reversed(tests[-RECENT_TESTS_LIMIT:])),
        improvement=calculate_improvement(tests),
        consistency=calculate_consistency(tests),
        weekly_progress=calculate_weekly_progress(tests, now),
    )


def build_leaderboard(users: list[User], limit: int = LEADERBOARD_LIMIT) -> list[LeaderboardEntry]:
    """Rank users with at least one test by average score, best first.

    Ties keep registration order.
    """
    active = [u for u in users if u.total_tests > 0]
    ranked = sorted(active, key=lambda u: u.average_score, reverse=True)[:limit]
    return [
        LeaderboardEntry(
            rank=index + 1,
            name=user.name,
            email=user.email,
            score=user.average_score,
            tests=user.total_tests,
            best_score=user.best_score,
            last_active=user.last_login,
        )
        for index, user in enumerate(ranked)
    ]


def build_platform_stats(users: list[User], ledger: MockTestLedger) -> PlatformStats:
    active = [u for u in users if u.total_tests > 0]
    average_platform_score = round_half_up(_mean([u.average_score for u in active])) if active else 0
    return PlatformStats(
        total_users=len(users),
        active_users=len(active),
        total_tests_submitted=ledger.count(),
        average_platform_score=average_platform_score,
        top_score=max((u.best_score for u in users), default=0),
        recent_activity=ledger.recent(RECENT_ACTIVITY_LIMIT),
    )
