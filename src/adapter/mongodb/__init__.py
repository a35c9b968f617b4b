"""MongoDB adapters and shared collection names."""

USERS_COLLECTION_NAME = 'users'
