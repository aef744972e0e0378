"""Unit tests for mock_test_service."""

import unittest

from adapter.memory.mock_test_ledger import InMemoryMockTestLedger
from adapter.memory.user_repository import InMemoryUserRepository
from domain.model.errors import NotFoundError, ValidationError
from domain.model.identity import ProfileClaims
from services.mock_test_service import build_mock_test, submit_mock_test

ADA = ProfileClaims(provider_id='g-ada', email='ada@example.com', name='Ada')


class TestBuildMockTest(unittest.TestCase):

    def test_requires_name_and_score(self):
        for name, score in [(None, 80), ('', 80), ('Mock', None)]:
            with self.subTest(name=name, score=score):
                with self.assertRaises(ValidationError) as ctx:
                    build_mock_test(name, score)
                self.assertEqual(str(ctx.exception), "Test name and score are required")

    def test_zero_score_is_accepted(self):
        self.assertEqual(build_mock_test('Mock', 0).score, 0)

    def test_non_numeric_score(self):
        with self.assertRaises(ValidationError) as ctx:
            build_mock_test('Mock', 'great')
        self.assertEqual(str(ctx.exception), "Score must be a number")

    def test_score_is_parsed_as_integer(self):
        self.assertEqual(build_mock_test('Mock', '85').score, 85)
        self.assertEqual(build_mock_test('Mock', 85.9).score, 85)

    def test_count_defaults(self):
        test = build_mock_test('Mock', 80)

        self.assertEqual(test.attempted, 120)
        self.assertEqual(test.correct, 0)
        self.assertEqual(test.incorrect, 0)
        self.assertEqual(test.accuracy, 0)

    def test_non_numeric_counts_fall_back_to_defaults(self):
        test = build_mock_test('Mock', 80, attempted='lots', correct=[1], incorrect='n/a')

        self.assertEqual(test.attempted, 120)
        self.assertEqual(test.correct, 0)
        self.assertEqual(test.incorrect, 0)

    def test_accuracy(self):
        self.assertEqual(build_mock_test('Mock', 80, attempted=100, correct=83, incorrect=17).accuracy, 83)

    def test_zero_attempted_has_zero_accuracy(self):
        self.assertEqual(build_mock_test('Mock', 80, attempted=0, correct=10).accuracy, 0)

    def test_accuracy_without_attempted_count(self):
        test = build_mock_test('Mock', 80, attempted=None, correct=60)

        self.assertEqual(test.attempted, 120)
        self.assertEqual(test.correct, 60)
        self.assertEqual(test.accuracy, 0)

    def test_accuracy_with_non_numeric_attempted(self):
        test = build_mock_test('Mock', 80, attempted='all of them', correct=60)

        self.assertEqual(test.attempted, 120)
        self.assertEqual(test.accuracy, 0)

    def test_accuracy_with_string_attempted(self):
        self.assertEqual(build_mock_test('Mock', 80, attempted='80', correct='60').accuracy, 75)


class TestSubmitMockTest(unittest.TestCase):

    def setUp(self):
        self.users = InMemoryUserRepository()
        self.ledger = InMemoryMockTestLedger()
        self.user, _ = self.users.upsert(ADA)

    def test_updates_history_aggregates_and_ledger(self):
        user, test = submit_mock_test(
            self.users, self.ledger, self.user.id,
            test_name='CLAT Mock 1', score=82, attempted=110, correct=90, incorrect=20,
        )

        self.assertEqual(user.total_tests, 1)
        self.assertEqual(user.average_score, 82)
        self.assertEqual(user.best_score, 82)
        self.assertEqual(user.mock_tests, [test])
        self.assertEqual(test.accuracy, 82)  # 90 / 110 = 81.8%

        entry, = self.ledger.recent(1)
        self.assertEqual(entry.test, test)
        self.assertEqual(entry.user_id, self.user.id)
        self.assertEqual(entry.user_email, 'ada@example.com')
        self.assertEqual(entry.user_name, 'Ada')

    def test_aggregates_after_many_submissions(self):
        scores = [55, 91, 78, 64, 88, 70, 99]
        for n, score in enumerate(scores, start=1):
            user, _ = submit_mock_test(self.users, self.ledger, self.user.id, test_name=f'Mock {n}', score=score)
            self.assertEqual(user.total_tests, n)
            self.assertEqual(user.best_score, max(scores[:n]))

        self.assertEqual(user.average_score, 78)  # 545 / 7 = 77.86
        self.assertEqual(self.ledger.count(), len(scores))

    def test_unknown_user(self):
        with self.assertRaises(NotFoundError):
            submit_mock_test(self.users, self.ledger, 'missing', test_name='Mock', score=80)
        self.assertEqual(self.ledger.count(), 0)

    def test_invalid_submission_changes_nothing(self):
        with self.assertRaises(ValidationError):
            submit_mock_test(self.users, self.ledger, self.user.id, test_name='Mock', score=None)

        self.assertEqual(self.users.get_by_id(self.user.id).total_tests, 0)
        self.assertEqual(self.ledger.count(), 0)


if __name__ == '__main__':
    unittest.main()
