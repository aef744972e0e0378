"""MongoDB implementation of MockTestLedger."""

from logging import getLogger
from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import MOCK_TESTS_COLLECTION_NAME
from adapter.mongodb.documents import doc_to_mock_test, mock_test_to_doc
from domain.model.mock_test import LedgerEntry

logger = getLogger(__name__)


class MongoMockTestLedger:
    def __init__(self, db: Database):
        self.collection = db[MOCK_TESTS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for mock_tests collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('date', -1)], 'idx_mock_tests_date')
            create_index_safe(self.collection, [('user_id', 1), ('date', -1)], 'idx_mock_tests_user_date')
            return True
        except PyMongoError as e:
            logger.error("Failed to create mock_tests indexes", extra={"error": str(e)})
            return False

    def append(self, entry: LedgerEntry) -> None:
        doc = {
            **mock_test_to_doc(entry.test),
            'user_id': entry.user_id,
            'user_email': entry.user_email,
            'user_name': entry.user_name,
        }
        try:
            self.collection.insert_one(doc)
        except PyMongoError as e:
            # The user's own history is already saved; only cross-user analytics miss this entry.
            logger.error("Failed to append ledger entry", extra={"testId": entry.test.id, "error": str(e)})

    def count(self) -> int:
        try:
            return self.collection.count_documents({})
        except PyMongoError as e:
            logger.error("Failed to count ledger entries", extra={"error": str(e)})
            return 0

    def recent(self, limit: int) -> list[LedgerEntry]:
        if limit <= 0:
            return []
        try:
            cursor = self.collection.find().sort([('date', DESCENDING), ('_id', DESCENDING)]).limit(limit)
            return [
                LedgerEntry(
                    test=doc_to_mock_test(doc),
                    user_id=doc['user_id'],
                    user_email=doc['user_email'],
                    user_name=doc['user_name'],
                )
                for doc in cursor
            ]
        except PyMongoError as e:
            logger.error("Failed to read recent ledger entries", extra={"error": str(e)})
            return []
