"""MongoDB adapters (used when MONGO_URL is configured)."""

USERS_COLLECTION_NAME = 'users'
MOCK_TESTS_COLLECTION_NAME = 'mock_tests'
