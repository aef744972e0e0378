from typing import Protocol

from domain.model.identity import ProfileClaims
from domain.model.mock_test import MockTest
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def upsert(self, claims: ProfileClaims) -> tuple[User, bool]:
        """Create the user for these provider claims, or refresh last_login if one exists.

        Return the User and True if it was newly created.
        """
        ...

    def add_test(self, user_id: str, test: MockTest) -> User | None:
        """Append a test to the user's history and recompute aggregates in one step.

        Return the updated User or None if the user does not exist.
        """
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_provider_id(self, provider_id: str) -> User | None:
        """Find a user by identity provider subject. Return User or None if not found."""
        ...

    def list_all(self) -> list[User]:
        """Return all users in registration order."""
        ...
