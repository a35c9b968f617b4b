"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateEmailError
from domain.model.user import Membership, User

logger = getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    """Documents written by a client without tz_aware come back naive; they are UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection.

        The unique email index is what guarantees one account per email;
        create/update rely on it instead of a separate existence check, so
        failing to build it raises instead of returning False.

        Raises:
            PyMongoError: idx_users_email could not be created (e.g. duplicate rows, no permission)
            RuntimeError: an existing conflicting index could not be replaced
        """
        from adapter.mongodb.indexes import create_index_safe

        if not create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True):
            raise RuntimeError("Unique index idx_users_email could not be ensured")

        try:
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            name=doc['name'],
            email=doc['email'],
            avatar=doc['avatar'],
            created_at=_as_utc(doc['created_at']),
            updated_at=_as_utc(doc['updated_at']),
            membership=Membership(doc.get('membership', Membership.BASIC.value)),
            last_login=_as_utc(doc.get('last_login')),
            password_hash=doc.get('password_hash'),
        )

    # ── write operations ─────────────────────────────────────

    def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        avatar: str,
        membership: Membership = Membership.BASIC,
    ) -> User:
        """Insert a new user document and return the User object."""
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': user_id,
            'name': name,
            'email': email,
            'password_hash': password_hash,
            'avatar': avatar,
            'membership': Membership(membership).value,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError:
            logger.warning("User creation failed: email already exists", extra={"email": email})
            raise DuplicateEmailError(email)
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            raise

        logger.info("User created", extra={"userId": user_id, "email": email})
        return self._to_domain(user_doc)

    def update(
        self,
        user_id: str,
        name: str | None = None,
        email: str | None = None,
        membership: Membership | None = None,
        avatar: str | None = None,
    ) -> User | None:
        """Overwrite the given fields and return the updated User, or None if not found."""
        fields = {'name': name, 'email': email, 'avatar': avatar}
        changes = {k: v for k, v in fields.items() if v is not None}
        if membership is not None:
            changes['membership'] = Membership(membership).value
        changes['updated_at'] = datetime.now(timezone.utc)

        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                {'$set': changes},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            logger.warning("User update failed: email already exists", extra={"userId": user_id})
            raise DuplicateEmailError(email)
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            raise

        if doc is None:
            return None
        logger.debug("Updated user", extra={"userId": user_id, "fields": sorted(changes)})
        return self._to_domain(doc)

    def update_last_login(self, user_id: str) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        try:
            now = datetime.now(timezone.utc)
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'last_login': now, 'updated_at': now}}
            )
            if result.modified_count > 0:
                logger.debug("Updated last_login", extra={"userId": user_id})
                return True
            return False
        except PyMongoError as e:
            logger.error("Failed to update last_login", extra={"userId": user_id, "error": str(e)})
            return False

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    def count(self) -> int:
        return self.collection.count_documents({})

    def list_all(self, skip: int = 0, limit: int = 100) -> list[User]:
        cursor = self.collection.find({}).sort('created_at', 1).skip(skip).limit(limit)
        return [self._to_domain(doc) for doc in cursor]
