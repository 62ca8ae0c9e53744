"""Exceptions for files app."""

from filebox.apps.core.exceptions import FileboxError


class NotFoundError(FileboxError):
    """Raised when a file or folder is absent or owned by someone else.

    Both cases share one message so callers cannot probe for other
    users' resources.
    """

    kind = 'not_found'
    default_message = 'File not found'


class ContentMissingError(NotFoundError):
    """Raised when a storage handle no longer resolves to content."""

    default_message = 'File content not found'


class StorageInconsistencyError(NotFoundError):
    """Raised when a file record exists but its content is gone."""

    kind = 'storage_inconsistency'
    default_message = 'File not found on server'


class RejectedTypeError(FileboxError):
    """Raised when an upload's type is outside the accepted set."""

    kind = 'rejected_type'
    default_message = 'Only images, PDFs, and documents allowed'


class TooLargeError(FileboxError):
    """Raised when an upload exceeds the size limit."""

    kind = 'too_large'

    def __init__(self, limit_bytes: int) -> None:
        """Initialize TooLargeError.

        Args:
            limit_bytes: Maximum accepted size in bytes.
        """
        self.limit_bytes = limit_bytes
        limit_mib = limit_bytes / (1024 * 1024)
        super().__init__(
            f'File too large. Maximum size is {limit_mib:g}MB',
        )


class WriteFailureError(FileboxError):
    """Raised when the storage backend fails to write or remove content."""

    kind = 'write_failure'
    default_message = 'Could not store file'
