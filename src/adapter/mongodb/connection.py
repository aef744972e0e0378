"""Optional MongoDB connection.

Storage switches to MongoDB only when MONGO_URL is set; otherwise every
repository stays in process memory and this module is never asked for a
client.
"""

import os
import logging
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# Driver-level logs are too chatty at INFO
logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'levelup')

_client: MongoClient | None = None
_gave_up = False


def is_configured() -> bool:
    """True when a MongoDB connection string is configured."""
    return bool(MONGO_URL)


def reset_client():
    global _client, _gave_up
    _client = None
    _gave_up = False


def get_mongodb_client() -> MongoClient | None:
    """Return a live client, or None when MongoDB cannot be reached.

    A cached client is re-pinged on every call and replaced if the ping
    fails. If the very first connection fails the URL is treated as
    misconfigured and no further attempts are made until reset_client().
    """
    global _client, _gave_up

    if _client is not None:
        try:
            _client.admin.command('ping')
            return _client
        except PyMongoError:
            logger.warning("[MONGODB] Lost connection, reconnecting")
            _client = None
            return _connect(first_attempt=False)

    if _gave_up or not MONGO_URL:
        return None
    return _connect(first_attempt=True)


def _connect(first_attempt: bool) -> MongoClient | None:
    global _client, _gave_up
    try:
        client = MongoClient(
            MONGO_URL,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000,
            maxPoolSize=10,
            retryWrites=True,
            tz_aware=True,
        )
        client.admin.command('ping')
    except PyMongoError as e:
        logger.error("[MONGODB] Connection failed", extra={"error": str(e)[:200]})
        if first_attempt:
            _gave_up = True
        return None

    if first_attempt:
        logger.info("[MONGODB] Connected", extra={"database": DATABASE_NAME})
    _client = client
    return client
