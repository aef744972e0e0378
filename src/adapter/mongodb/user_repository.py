"""MongoDB implementation of UserRepository."""

from datetime import datetime, timezone
from logging import getLogger
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError
from adapter.mongodb import USERS_COLLECTION_NAME
from adapter.mongodb.documents import as_utc, doc_to_mock_test, mock_test_to_doc
from domain.model.errors import DomainError
from domain.model.identity import ProfileClaims
from domain.model.mock_test import MockTest
from domain.model.user import DEFAULT_ROLE, User
from utils.ids import epoch_id

logger = getLogger(__name__)


def _add_test_pipeline(test_doc: dict) -> list[dict]:
    """Update pipeline that appends a test and recomputes the aggregates in the same write."""
    return [
        {'$set': {'mock_tests': {'$concatArrays': [{'$ifNull': ['$mock_tests', []]}, [test_doc]]}}},
        {'$set': {
            'total_tests': {'$size': '$mock_tests'},
            'average_score': {'$floor': {'$add': [{'$avg': '$mock_tests.score'}, 0.5]}},
            'best_score': {'$max': '$mock_tests.score'},
        }},
    ]


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('provider_id', 1)], 'idx_users_provider_id', unique=True)
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email')
            create_index_safe(self.collection, [('joined_date', 1)], 'idx_users_joined_date')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            provider_id=doc['provider_id'],
            email=doc['email'],
            name=doc['name'],
            avatar=doc.get('avatar'),
            role=doc.get('role', DEFAULT_ROLE),
            joined_date=as_utc(doc['joined_date']),
            last_login=as_utc(doc['last_login']),
            mock_tests=[doc_to_mock_test(t) for t in doc.get('mock_tests', [])],
            total_tests=int(doc.get('total_tests', 0)),
            average_score=int(doc.get('average_score', 0)),
            best_score=int(doc.get('best_score', 0)),
        )

    def upsert(self, claims: ProfileClaims) -> tuple[User, bool]:
        """Insert the user on first login, otherwise refresh last_login."""
        new_id = epoch_id()
        now = datetime.now(timezone.utc)
        try:
            doc = self.collection.find_one_and_update(
                {'provider_id': claims.provider_id},
                {
                    '$set': {'last_login': now},
                    '$setOnInsert': {
                        '_id': new_id,
                        'email': claims.email,
                        'name': claims.name,
                        'avatar': claims.avatar,
                        'role': DEFAULT_ROLE,
                        'mock_tests': [],
                        'total_tests': 0,
                        'average_score': 0,
                        'best_score': 0,
                        'joined_date': now,
                    },
                },
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to upsert user", extra={"providerId": claims.provider_id, "error": str(e)})
            raise DomainError("Failed to save user") from e

        return self._to_domain(doc), doc['_id'] == new_id

    def add_test(self, user_id: str, test: MockTest) -> User | None:
        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                _add_test_pipeline(mock_test_to_doc(test)),
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to record test", extra={"userId": user_id, "error": str(e)})
            raise DomainError("Failed to save test") from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        return self._find_one({'_id': user_id})

    def get_by_email(self, email: str) -> User | None:
        return self._find_one({'email': email})

    def get_by_provider_id(self, provider_id: str) -> User | None:
        return self._find_one({'provider_id': provider_id})

    def list_all(self) -> list[User]:
        try:
            return [self._to_domain(doc) for doc in self.collection.find().sort('joined_date', 1)]
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            return []

    def _find_one(self, query: dict) -> User | None:
        try:
            doc = self.collection.find_one(query)
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get user", extra={"query": str(query), "error": str(e)})
            return None
