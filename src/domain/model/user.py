from dataclasses import dataclass, field
from datetime import datetime

from domain.model.mock_test import MockTest
from utils.scoring import round_half_up

DEFAULT_ROLE = 'student'


@dataclass
class User:
    """Domain model representing a platform user and their test history.

    `total_tests`, `average_score` and `best_score` are derived from
    `mock_tests` and must only change through `record_test`.
    """
    id: str
    provider_id: str
    email: str
    name: str
    joined_date: datetime
    last_login: datetime
    avatar: str | None = None
    role: str = DEFAULT_ROLE
    mock_tests: list[MockTest] = field(default_factory=list)
    total_tests: int = 0
    average_score: int = 0
    best_score: int = 0

    def record_test(self, test: MockTest) -> None:
        """Append a test to the history and recompute the aggregates."""
        self.mock_tests.append(test)
        self.total_tests = len(self.mock_tests)
        self.average_score = round_half_up(
            sum(t.score for t in self.mock_tests) / self.total_tests
        )
        self.best_score = max(t.score for t in self.mock_tests)
