"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class DuplicateEmailError(DuplicateError):
    """Another user already owns this email address."""

    def __init__(self, email: str | None = None):
        self.email = email
        super().__init__("Email already exists")


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class InvalidCredentialsError(DomainError):
    """Login failed. Deliberately does not say whether email or password was wrong."""

    def __init__(self):
        super().__init__("Invalid credentials")


class AuthError(DomainError):
    """Base class for bearer token failures."""


class MissingTokenError(AuthError):
    """No bearer token was presented."""

    def __init__(self):
        super().__init__("No token, authorization denied")


class InvalidTokenError(AuthError):
    """Token is malformed, expired, or signed with another key."""

    def __init__(self):
        super().__init__("Token is not valid")


class EncodeError(DomainError):
    """QR code rendering failed."""
