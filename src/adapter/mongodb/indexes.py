"""Index setup for the users and mock_tests collections, run at app startup."""

from logging import getLogger

from pymongo.errors import OperationFailure

logger = getLogger(__name__)


def create_index_safe(collection, keys: list, name: str, **kwargs) -> None:
    """Create an index, replacing an older index with the same name or keys.

    MongoDB refuses to create an index whose name or key pattern clashes
    with an existing one, so a changed definition is dropped and rebuilt.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return
    except OperationFailure as e:
        if 'already exists' not in str(e) and 'Conflict' not in str(e):
            raise

    wanted = dict(keys)
    for existing_name, info in collection.index_information().items():
        if existing_name == '_id_':
            continue
        if existing_name == name or dict(info.get('key', [])) == wanted:
            logger.warning("Replacing index", extra={"old": existing_name, "new": name})
            collection.drop_index(existing_name)
    collection.create_index(keys, name=name, **kwargs)


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for every collection. Returns False if any failed."""
    from adapter.mongodb.user_repository import MongoUserRepository
    from adapter.mongodb.mock_test_ledger import MongoMockTestLedger

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoMockTestLedger(db).ensure_indexes(),
    ]
    return all(results)
