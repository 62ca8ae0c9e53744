"""Storage backends for uploaded content."""

import logging
from typing import Any, Final, final

from botocore.exceptions import ClientError
from django.core.files.storage import FileSystemStorage
from storages.backends.s3 import S3Storage

from filebox.apps.files.exceptions import WriteFailureError

logger = logging.getLogger(__name__)

# Error codes S3-compatible servers use for a key that is not there
_MISSING_CODES: Final = frozenset(('404', 'NoSuchKey', 'NotFound'))


def is_missing_error(error: Exception) -> bool:
    """Tell whether a backend error means the content is not stored."""
    if isinstance(error, FileNotFoundError):
        return True
    if isinstance(error, ClientError):
        return error.response.get('Error', {}).get('Code') in _MISSING_CODES
    return False


class ContentStorageMixin:
    """Failure handling shared by the content backends.

    Backend errors surface as ``WriteFailureError``. Removing content
    that is already gone succeeds. Mix in before a Django storage class.
    """

    def save(
        self,
        name: str,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Write content under ``name``.

        A failed write discards whatever part of it reached the
        backend before the error is raised.

        Raises:
            WriteFailureError: If the backend write fails.
        """
        try:
            return super().save(name, content, max_length)  # type: ignore[misc]
        except Exception as error:
            logger.exception('Write failed: %s', name)
            self._discard_partial(name)
            raise WriteFailureError() from error

    def delete(self, name: str) -> None:
        """Remove content, treating absent content as removed.

        Raises:
            WriteFailureError: If the backend fails to remove it.
        """
        try:
            super().delete(name)  # type: ignore[misc]
        except Exception as error:
            if is_missing_error(error):
                logger.info('Content already absent: %s', name)
                return
            logger.exception('Remove failed: %s', name)
            raise WriteFailureError('Could not remove file content') from error
        logger.info('Content removed: %s', name)

    def _discard_partial(self, name: str) -> None:
        try:
            super().delete(name)  # type: ignore[misc]
        except Exception as error:
            if not is_missing_error(error):
                logger.warning(
                    'Partial write left for the storage scan: %s',
                    name,
                )


@final
class S3FileStorage(ContentStorageMixin, S3Storage):
    """S3-compatible content storage (MinIO, AWS S3, Cloudflare R2)."""


@final
class LocalFileStorage(ContentStorageMixin, FileSystemStorage):
    """Content storage in a local directory (``MEDIA_ROOT`` by default)."""
