"""Process-memory implementation of UserRepository.

All data is lost when the process exits.
"""

import threading
from datetime import datetime, timezone

from domain.model.identity import ProfileClaims
from domain.model.mock_test import MockTest
from domain.model.user import User
from utils.ids import epoch_id


class InMemoryUserRepository:
    def __init__(self):
        # dict preserves insertion order, so iteration follows registration order
        self.store: dict[str, User] = {}
        self._lock = threading.Lock()

    # ── write operations ─────────────────────────────────────

    def upsert(self, claims: ProfileClaims) -> tuple[User, bool]:
        now = datetime.now(timezone.utc)
        with self._lock:
            user = self._find_by_provider_id(claims.provider_id)
            if user:
                user.last_login = now
                return user, False

            user = User(
                id=epoch_id(),
                provider_id=claims.provider_id,
                email=claims.email,
                name=claims.name,
                avatar=claims.avatar,
                joined_date=now,
                last_login=now,
            )
            self.store[user.id] = user
            return user, True

    def add_test(self, user_id: str, test: MockTest) -> User | None:
        with self._lock:
            user = self.store.get(user_id)
            if not user:
                return None
            user.record_test(test)
            return user

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def get_by_provider_id(self, provider_id: str) -> User | None:
        return self._find_by_provider_id(provider_id)

    def list_all(self) -> list[User]:
        return list(self.store.values())

    def _find_by_provider_id(self, provider_id: str) -> User | None:
        for user in self.store.values():
            if user.provider_id == provider_id:
                return user
        return None
