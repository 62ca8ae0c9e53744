"""Exceptions for accounts app."""

import enum

from filebox.apps.core.exceptions import FileboxError


class AuthFailureReason(enum.StrEnum):
    """Why a credential check failed. Never shown to the user."""

    NOT_FOUND = 'not_found'
    WRONG_PASSWORD = 'wrong_password'
    INACTIVE = 'inactive'


class DuplicateIdentityError(FileboxError):
    """Raised when a username or email is already registered."""

    kind = 'duplicate_identity'
    default_message = 'Username or email is already taken'


class AuthFailureError(FileboxError):
    """Raised when credentials do not verify.

    The message is the same for every reason so responses cannot be
    used to find out which usernames exist.
    """

    kind = 'auth_failure'
    default_message = 'Invalid username or password'

    def __init__(self, reason: AuthFailureReason) -> None:
        """Initialize AuthFailureError.

        Args:
            reason: Internal failure reason, kept for logging and tests.
        """
        self.reason = reason
        super().__init__()


class UnauthenticatedError(FileboxError):
    """Raised when a request carries no valid session."""

    kind = 'unauthenticated'
    default_message = 'Not authenticated'
