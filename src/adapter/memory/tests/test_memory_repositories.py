"""Unit tests for the in-memory UserRepository and MockTestLedger."""

import threading
import unittest

from adapter.memory.mock_test_ledger import InMemoryMockTestLedger
from adapter.memory.user_repository import InMemoryUserRepository
from domain.model.identity import ProfileClaims
from domain.model.mock_test import LedgerEntry, MockTest

ADA = ProfileClaims(provider_id='g-ada', email='ada@example.com', name='Ada', avatar='https://img/ada.png')
ALAN = ProfileClaims(provider_id='g-alan', email='alan@example.com', name='Alan')


class TestInMemoryUserRepository(unittest.TestCase):

    def setUp(self):
        self.repo = InMemoryUserRepository()

    # ── upsert ────────────────────────────────────────────────

    def test_upsert_creates_student(self):
        user, created = self.repo.upsert(ADA)

        self.assertTrue(created)
        self.assertEqual(user.provider_id, 'g-ada')
        self.assertEqual(user.email, 'ada@example.com')
        self.assertEqual(user.avatar, 'https://img/ada.png')
        self.assertEqual(user.role, 'student')
        self.assertEqual(user.total_tests, 0)
        self.assertEqual(user.joined_date, user.last_login)

    def test_upsert_existing_refreshes_last_login_only(self):
        user, _ = self.repo.upsert(ADA)
        first_login = user.last_login
        renamed = ProfileClaims(provider_id='g-ada', email='ada@example.com', name='Ada L.')

        again, created = self.repo.upsert(renamed)

        self.assertFalse(created)
        self.assertEqual(again.id, user.id)
        self.assertEqual(again.name, 'Ada')
        self.assertGreaterEqual(again.last_login, first_login)
        self.assertEqual(len(self.repo.list_all()), 1)

    def test_ids_are_unique(self):
        first, _ = self.repo.upsert(ADA)
        second, _ = self.repo.upsert(ALAN)
        self.assertNotEqual(first.id, second.id)

    # ── reads ─────────────────────────────────────────────────

    def test_lookups(self):
        user, _ = self.repo.upsert(ADA)

        self.assertIs(self.repo.get_by_id(user.id), user)
        self.assertIs(self.repo.get_by_email('ada@example.com'), user)
        self.assertIs(self.repo.get_by_provider_id('g-ada'), user)

    def test_lookups_return_none_for_missing(self):
        self.assertIsNone(self.repo.get_by_id('nope'))
        self.assertIsNone(self.repo.get_by_email('nobody@example.com'))
        self.assertIsNone(self.repo.get_by_provider_id('g-nope'))

    def test_list_all_preserves_insertion_order(self):
        self.repo.upsert(ALAN)
        self.repo.upsert(ADA)
        self.repo.upsert(ALAN)

        self.assertEqual([u.email for u in self.repo.list_all()], ['alan@example.com', 'ada@example.com'])

    # ── add_test ──────────────────────────────────────────────

    def test_add_test_updates_aggregates(self):
        user, _ = self.repo.upsert(ADA)

        self.repo.add_test(user.id, MockTest.create('t1', 'Mock 1', 60))
        updated = self.repo.add_test(user.id, MockTest.create('t2', 'Mock 2', 81))

        self.assertEqual(updated.total_tests, 2)
        self.assertEqual(updated.average_score, 71)  # 70.5 rounds up
        self.assertEqual(updated.best_score, 81)

    def test_add_test_unknown_user(self):
        self.assertIsNone(self.repo.add_test('missing', MockTest.create('t1', 'Mock', 50)))

    def test_concurrent_add_test_keeps_aggregates_consistent(self):
        user, _ = self.repo.upsert(ADA)

        def submit(offset):
            for i in range(50):
                self.repo.add_test(user.id, MockTest.create(f'{offset}-{i}', 'Mock', 50 + (i % 2)))

        threads = [threading.Thread(target=submit, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(user.total_tests, 200)
        self.assertEqual(len(user.mock_tests), 200)
        self.assertEqual(user.average_score, 51)  # mean 50.5 rounds up
        self.assertEqual(user.best_score, 51)


class TestInMemoryMockTestLedger(unittest.TestCase):

    def setUp(self):
        self.ledger = InMemoryMockTestLedger()

    def _entry(self, n: int) -> LedgerEntry:
        return LedgerEntry(
            test=MockTest.create(f't{n}', f'Mock {n}', n),
            user_id='u1',
            user_email='ada@example.com',
            user_name='Ada',
        )

    def test_empty(self):
        self.assertEqual(self.ledger.count(), 0)
        self.assertEqual(self.ledger.recent(10), [])

    def test_recent_is_newest_first_and_capped(self):
        for n in range(12):
            self.ledger.append(self._entry(n))

        recent = self.ledger.recent(10)

        self.assertEqual(self.ledger.count(), 12)
        self.assertEqual([e.test.id for e in recent], [f't{n}' for n in range(11, 1, -1)])

    def test_recent_with_fewer_entries_than_limit(self):
        self.ledger.append(self._entry(1))
        self.ledger.append(self._entry(2))

        self.assertEqual([e.test.id for e in self.ledger.recent(10)], ['t2', 't1'])

    def test_recent_non_positive_limit(self):
        self.ledger.append(self._entry(1))
        self.assertEqual(self.ledger.recent(0), [])


if __name__ == '__main__':
    unittest.main()
