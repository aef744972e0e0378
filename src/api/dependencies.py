"""Repository and identity-provider wiring for route handlers.

Without MONGO_URL the process-memory adapters are used; they live for the
lifetime of the process and are shared by every request.
"""

from fastapi import HTTPException

from adapter.google.oauth import GoogleOAuthAdapter
from adapter.memory.mock_test_ledger import InMemoryMockTestLedger
from adapter.memory.user_repository import InMemoryUserRepository
from adapter.mongodb.connection import get_mongodb_client, is_configured, DATABASE_NAME
from adapter.mongodb.mock_test_ledger import MongoMockTestLedger
from adapter.mongodb.user_repository import MongoUserRepository
from api.config import get_settings
from port.identity_provider import IdentityProvider
from port.mock_test_ledger import MockTestLedger
from port.user_repository import UserRepository

_memory_users = InMemoryUserRepository()
_memory_ledger = InMemoryMockTestLedger()


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo() -> UserRepository:
    if is_configured():
        return MongoUserRepository(_get_db())
    return _memory_users


def get_mock_test_ledger() -> MockTestLedger:
    if is_configured():
        return MongoMockTestLedger(_get_db())
    return _memory_ledger


def get_identity_provider() -> IdentityProvider:
    settings = get_settings()
    return GoogleOAuthAdapter(
        client_id=settings.google_client_id or "",
        client_secret=settings.google_client_secret or "",
    )
