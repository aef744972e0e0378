"""Read-side value objects produced by the analytics service."""

from dataclasses import dataclass
from datetime import datetime

from domain.model.mock_test import LedgerEntry, MockTest


class Consistency:
    INSUFFICIENT_DATA = 'Insufficient Data'
    VERY_CONSISTENT = 'Very Consistent'
    CONSISTENT = 'Consistent'
    MODERATELY_CONSISTENT = 'Moderately Consistent'
    NEEDS_FOCUS = 'Needs Focus'


@dataclass(frozen=True)
class WeeklyPoint:
    date: datetime
    score: int
    test_name: str


@dataclass(frozen=True)
class UserAnalytics:
    total_tests: int
    average_score: int
    best_score: int
    recent_tests: list[MockTest]
    improvement: int
    consistency: str
    weekly_progress: list[WeeklyPoint]


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    name: str
    email: str
    score: int
    tests: int
    best_score: int
    last_active: datetime


@dataclass(frozen=True)
class PlatformStats:
    total_users: int
    active_users: int
    total_tests_submitted: int
    average_platform_score: int
    top_score: int
    recent_activity: list[LedgerEntry]
