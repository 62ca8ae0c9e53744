"""Base exception for typed service failures."""

from typing import ClassVar


class FileboxError(Exception):
    """Base class for failures that cross the service boundary.

    Each subclass names a machine-readable ``kind``. The message is
    safe to show to the user: no internal paths, no storage handles.
    """

    kind: ClassVar[str] = 'error'
    default_message: ClassVar[str] = 'Request failed'

    def __init__(self, message: str | None = None) -> None:
        """Initialize FileboxError.

        Args:
            message: Human-readable message; defaults to the class message.
        """
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequestError(FileboxError):
    """Raised when request data fails validation."""

    kind = 'invalid_request'
    default_message = 'Invalid request'


class CsrfFailureError(FileboxError):
    """Raised when a state-changing request fails the CSRF check."""

    kind = 'csrf_failure'
    default_message = 'CSRF verification failed'
