"""Mock test submission service.

Flow: validate → build MockTest → append to user history (aggregates
recomputed with the append) → append denormalized copy to the ledger.
"""

import logging

from domain.model.errors import NotFoundError, ValidationError
from domain.model.mock_test import DEFAULT_ATTEMPTED, LedgerEntry, MockTest, compute_accuracy
from domain.model.user import User
from port.mock_test_ledger import MockTestLedger
from port.user_repository import UserRepository
from utils.ids import epoch_id
from utils.scoring import parse_int

logger = logging.getLogger(__name__)


def build_mock_test(test_name, score, attempted=None, correct=None, incorrect=None) -> MockTest:
    """Validate raw submission fields and build a MockTest.

    Raises:
        ValidationError: test name or score missing, or score not numeric
    """
    if not test_name or score is None:
        raise ValidationError("Test name and score are required")

    parsed_score = parse_int(score)
    if parsed_score is None:
        raise ValidationError("Score must be a number")

    submitted_attempted = parse_int(attempted)
    parsed_correct = parse_int(correct, 0)

    # Accuracy uses the attempted count as submitted: no count, no accuracy.
    # The stored count still falls back to DEFAULT_ATTEMPTED.
    return MockTest.create(
        test_id=epoch_id(),
        test_name=str(test_name),
        score=parsed_score,
        attempted=DEFAULT_ATTEMPTED if submitted_attempted is None else submitted_attempted,
        correct=parsed_correct,
        incorrect=parse_int(incorrect, 0),
        accuracy=compute_accuracy(parsed_correct, submitted_attempted or 0),
    )


def submit_mock_test(
    users: UserRepository,
    ledger: MockTestLedger,
    user_id: str,
    test_name,
    score,
    attempted=None,
    correct=None,
    incorrect=None,
) -> tuple[User, MockTest]:
    """Record a test result for a user.

    Returns the updated User and the stored MockTest.

    Raises:
        ValidationError: invalid submission
        NotFoundError: user does not exist
    """
    test = build_mock_test(test_name, score, attempted, correct, incorrect)

    user = users.add_test(user_id, test)
    if not user:
        raise NotFoundError("User not found")

    ledger.append(LedgerEntry(
        test=test,
        user_id=user.id,
        user_email=user.email,
        user_name=user.name,
    ))

    logger.info("Mock test submitted", extra={
        "userId": user.id,
        "testName": test.test_name,
        "score": test.score,
        "totalTests": user.total_tests,
    })
    return user, test
