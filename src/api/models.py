"""Pydantic models for API request/response.

Fields are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.model.analytics import LeaderboardEntry, PlatformStats, UserAnalytics, WeeklyPoint
from domain.model.mock_test import LedgerEntry, MockTest
from domain.model.user import User


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Requests ─────────────────────────────────────────────


class MockTestRequest(CamelModel):
    """Request model for submitting a mock test.

    Fields are loosely typed: required-field and numeric checks happen in
    the submission service so they can be reported as 400s.
    """
    test_name: Any = Field(None, description="Name of the test")
    score: Any = Field(None, description="Score obtained")
    attempted: Any = Field(None, description="Questions attempted (default 120)")
    correct: Any = Field(None, description="Correct answers (default 0)")
    incorrect: Any = Field(None, description="Incorrect answers (default 0)")


# ── Responses ────────────────────────────────────────────


class MockTestResponse(CamelModel):
    id: str
    test_name: str
    score: int
    attempted: int
    correct: int
    incorrect: int
    accuracy: int = Field(..., description="Correct / attempted, as a rounded percentage")
    date: datetime

    @classmethod
    def from_domain(cls, test: MockTest) -> "MockTestResponse":
        return cls(
            id=test.id,
            test_name=test.test_name,
            score=test.score,
            attempted=test.attempted,
            correct=test.correct,
            incorrect=test.incorrect,
            accuracy=test.accuracy,
            date=test.date,
        )


class LedgerEntryResponse(MockTestResponse):
    user_id: str
    user_email: str
    user_name: str

    @classmethod
    def from_entry(cls, entry: LedgerEntry) -> "LedgerEntryResponse":
        return cls(
            **MockTestResponse.from_domain(entry.test).model_dump(),
            user_id=entry.user_id,
            user_email=entry.user_email,
            user_name=entry.user_name,
        )


class UserResponse(CamelModel):
    """Full user record, without the identity provider's subject id."""
    id: str
    email: str
    name: str
    avatar: Optional[str] = None
    role: str
    mock_tests: list[MockTestResponse]
    total_tests: int
    average_score: int
    best_score: int
    joined_date: datetime
    last_login: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            avatar=user.avatar,
            role=user.role,
            mock_tests=[MockTestResponse.from_domain(t) for t in user.mock_tests],
            total_tests=user.total_tests,
            average_score=user.average_score,
            best_score=user.best_score,
            joined_date=user.joined_date,
            last_login=user.last_login,
        )


class UserSummary(CamelModel):
    id: str
    name: str
    email: str
    total_tests: int
    average_score: int
    best_score: int

    @classmethod
    def from_domain(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            total_tests=user.total_tests,
            average_score=user.average_score,
            best_score=user.best_score,
        )


class MockTestSubmitResponse(CamelModel):
    success: bool = True
    user: UserSummary
    test: MockTestResponse
    message: str = "Mock test saved successfully!"


class StudentResponse(CamelModel):
    id: str
    name: str
    email: str
    total_tests: int
    average_score: int
    best_score: int
    last_login: datetime
    joined_date: datetime

    @classmethod
    def from_domain(cls, user: User) -> "StudentResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            total_tests=user.total_tests,
            average_score=user.average_score,
            best_score=user.best_score,
            last_login=user.last_login,
            joined_date=user.joined_date,
        )


class WeeklyPointResponse(CamelModel):
    date: datetime
    score: int
    test_name: str

    @classmethod
    def from_domain(cls, point: WeeklyPoint) -> "WeeklyPointResponse":
        return cls(date=point.date, score=point.score, test_name=point.test_name)


class AnalyticsResponse(CamelModel):
    total_tests: int
    average_score: int
    best_score: int
    recent_tests: list[MockTestResponse] = Field(..., description="Last 5 tests, newest first")
    improvement: int
    consistency: str
    weekly_progress: list[WeeklyPointResponse]

    @classmethod
    def from_domain(cls, analytics: UserAnalytics) -> "AnalyticsResponse":
        return cls(
            total_tests=analytics.total_tests,
            average_score=analytics.average_score,
            best_score=analytics.best_score,
            recent_tests=[MockTestResponse.from_domain(t) for t in analytics.recent_tests],
            improvement=analytics.improvement,
            consistency=analytics.consistency,
            weekly_progress=[WeeklyPointResponse.from_domain(p) for p in analytics.weekly_progress],
        )


class LeaderboardEntryResponse(CamelModel):
    rank: int
    name: str
    email: str
    score: int
    tests: int
    best_score: int
    last_active: datetime

    @classmethod
    def from_domain(cls, entry: LeaderboardEntry) -> "LeaderboardEntryResponse":
        return cls(
            rank=entry.rank,
            name=entry.name,
            email=entry.email,
            score=entry.score,
            tests=entry.tests,
            best_score=entry.best_score,
            last_active=entry.last_active,
        )


class PlatformStatsResponse(CamelModel):
    total_users: int
    active_users: int
    total_tests_submitted: int
    average_platform_score: int
    top_score: int
    recent_activity: list[LedgerEntryResponse] = Field(..., description="Last 10 submissions, newest first")

    @classmethod
    def from_domain(cls, stats: PlatformStats) -> "PlatformStatsResponse":
        return cls(
            total_users=stats.total_users,
            active_users=stats.active_users,
            total_tests_submitted=stats.total_tests_submitted,
            average_platform_score=stats.average_platform_score,
            top_score=stats.top_score,
            recent_activity=[LedgerEntryResponse.from_entry(e) for e in stats.recent_activity],
        )


class LogoutResponse(CamelModel):
    success: bool = True
    message: str = "Logged out successfully"
