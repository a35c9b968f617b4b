from typing import Protocol

from domain.model.user import Membership, User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Implementations enforce email uniqueness themselves (unique index or
    atomic insert-if-absent) and raise DuplicateEmailError on collision,
    so callers never pre-check for an existing email.
    """
    def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        avatar: str,
        membership: Membership = Membership.BASIC,
    ) -> User:
        """Insert a new user. Raise DuplicateEmailError if the email is taken."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def update(
        self,
        user_id: str,
        name: str | None = None,
        email: str | None = None,
        membership: Membership | None = None,
        avatar: str | None = None,
    ) -> User | None:
        """Overwrite the given fields. Return updated User, or None if the ID does not resolve.

        Raises DuplicateEmailError if email belongs to another user.
        """
        ...

    def update_last_login(self, user_id: str) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        ...

    def count(self) -> int:
        """Return the total number of users."""
        ...

    def list_all(self, skip: int = 0, limit: int = 100) -> list[User]:
        """Return users ordered by creation time, oldest first."""
        ...
