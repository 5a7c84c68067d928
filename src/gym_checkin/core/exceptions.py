from __future__ import annotations

from typing import Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "domain_error"
    retryable = False


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "validation_error"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or no one is logged in."""

    kind = "authentication_error"


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission, or member and gym do not match."""

    kind = "authorization_error"


class InvalidCredentialError(DomainError):
    """Raised when a scanned QR value is not the gym's current credential."""

    kind = "invalid_credential"


class StoreUnavailableError(DomainError):
    """Raised when the data store cannot be reached. Nothing is assumed committed."""

    kind = "store_unavailable"
    retryable = True


class InconsistentStateError(DomainError):
    """Raised when a write did not produce the state it should have.

    `open_session` is the session still seen as open after the write, if any.
    """

    kind = "inconsistent_state"

    def __init__(self, message: str, *, member_id: Optional[int] = None, open_session=None):
        super().__init__(message)
        self.member_id = member_id
        self.open_session = open_session


class DuplicateOpenSessionError(DomainError):
    """Raised when a member already has an open session the store will not duplicate."""

    kind = "duplicate_open_session"

    def __init__(self, message: str, *, member_id: int, session_ids: Sequence[int] = ()):
        super().__init__(message)
        self.member_id = member_id
        self.session_ids = tuple(session_ids)
