import logging
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

from utils.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Driver-level logs are noisy at INFO
logging.getLogger('pymongo').setLevel(logging.WARNING)

_client_cache: MongoClient | None = None
_connection_attempted = False
_connection_failed = False


def reset_client():
    global _client_cache, _connection_attempted, _connection_failed
    if _client_cache is not None:
        _client_cache.close()
    _client_cache = None
    _connection_attempted = False
    _connection_failed = False


def get_mongodb_client(settings: Settings | None = None) -> MongoClient | None:
    """Get MongoDB client with connection caching and reconnection logic.

    Connection strategy:
    1. Return cached client if healthy (ping succeeds)
    2. If cached client fails, attempt reconnection
    3. If initial connection failed (config issue), don't retry

    Returns:
        MongoDB client or None if connection fails
    """
    global _client_cache, _connection_attempted, _connection_failed
    settings = settings or get_settings()

    if _client_cache:
        try:
            _client_cache.admin.command('ping')
            return _client_cache
        except PyMongoError:
            _client_cache = None
            logger.debug("[MONGODB] Cached client failed ping, attempting reconnection...")

    if _connection_failed:
        return None

    if not settings.mongo_url:
        logger.error("[MONGODB] MONGO_URL not configured.")
        _connection_failed = True
        return None

    try:
        client = MongoClient(
            settings.mongo_url,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000,
            socketTimeoutMS=30000,
            maxPoolSize=10,
            minPoolSize=0,
            maxIdleTimeMS=30000,
            waitQueueTimeoutMS=10000,
            retryWrites=True,
            retryReads=True,
            tz_aware=True,
        )
        client.admin.command('ping')

        is_first_connection = not _connection_attempted
        _connection_attempted = True
        _client_cache = client

        if is_first_connection:
            logger.info(f"[MONGODB] Connected successfully to {settings.mongodb_database}")

        return client
    except (ConnectionFailure, PyMongoError) as e:
        if not _connection_attempted:
            logger.error(f"[MONGODB] Initial connection failed: {str(e)[:200]}")
            _connection_failed = True
        return None
