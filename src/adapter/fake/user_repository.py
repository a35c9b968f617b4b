"""In-memory implementation of UserRepository for testing."""

import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone

from domain.model.errors import DuplicateEmailError
from domain.model.user import Membership, User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        # Guards every access to store; email checks and writes are atomic
        self._lock = threading.Lock()

    # ── write operations ─────────────────────────────────────

    def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        avatar: str,
        membership: Membership = Membership.BASIC,
    ) -> User:
        with self._lock:
            if self._email_owner(email) is not None:
                raise DuplicateEmailError(email)

            user_id = uuid.uuid4().hex
            now = datetime.now(timezone.utc)

            user = User(
                id=user_id,
                name=name,
                email=email,
                avatar=avatar,
                created_at=now,
                updated_at=now,
                membership=membership,
                password_hash=password_hash,
            )
            self.store[user_id] = user
            return replace(user)

    def update(
        self,
        user_id: str,
        name: str | None = None,
        email: str | None = None,
        membership: Membership | None = None,
        avatar: str | None = None,
    ) -> User | None:
        with self._lock:
            user = self.store.get(user_id)
            if not user:
                return None

            if email is not None:
                owner = self._email_owner(email)
                if owner is not None and owner != user_id:
                    raise DuplicateEmailError(email)
                user.email = email
            if name is not None:
                user.name = name
            if membership is not None:
                user.membership = membership
            if avatar is not None:
                user.avatar = avatar
            user.updated_at = datetime.now(timezone.utc)
            return replace(user)

    def update_last_login(self, user_id: str) -> bool:
        with self._lock:
            user = self.store.get(user_id)
            if not user:
                return False

            now = datetime.now(timezone.utc)
            user.last_login = now
            user.updated_at = now
            return True

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        with self._lock:
            user_id = self._email_owner(email)
            return replace(self.store[user_id]) if user_id else None

    def get_by_id(self, user_id: str) -> User | None:
        with self._lock:
            user = self.store.get(user_id)
            return replace(user) if user else None

    def count(self) -> int:
        with self._lock:
            return len(self.store)

    def list_all(self, skip: int = 0, limit: int = 100) -> list[User]:
        with self._lock:
            users = sorted(self.store.values(), key=lambda u: u.created_at)
            return [replace(u) for u in users[skip:skip + limit]]

    # ── helpers ──────────────────────────────────────────────

    def _email_owner(self, email: str) -> str | None:
        for user_id, user in self.store.items():
            if user.email == email:
                return user_id
        return None
