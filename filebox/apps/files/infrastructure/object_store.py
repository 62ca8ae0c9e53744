"""Object store: placing, opening and removing uploaded content.

Content is addressed by an opaque storage handle. Handles are
generated here and are never built from user input.
"""

import hashlib
import logging
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, BinaryIO, Final, final

from django.conf import settings
from django.core.files.base import File as DjangoFile
from django.core.files.storage import default_storage

from filebox.apps.core.exceptions import InvalidRequestError
from filebox.apps.files.exceptions import (
    ContentMissingError,
    TooLargeError,
)
from filebox.apps.files.infrastructure.metadata import (
    detect_mime_type,
    generate_storage_handle,
    validate_declared_type,
)

if TYPE_CHECKING:
    from filebox.apps.files.infrastructure.storage import ContentStorageMixin

logger = logging.getLogger(__name__)

_CHUNK_SIZE: Final = 8192  # 8KB chunks while streaming
_SPOOL_MAX_MEMORY: Final = 1024 * 1024  # Spill to disk above 1MB
_DEFAULT_MAX_UPLOAD_BYTES: Final = 5 * 1024 * 1024


@final
@dataclass(frozen=True, slots=True)
class PlacedContent:
    """Result of a successful placement."""

    handle: str
    size_bytes: int
    checksum_sha256: str
    mime_type: str


def _get_storage() -> 'ContentStorageMixin':
    """Get the configured default storage backend.

    Returns:
        Content storage backend.
    """
    return default_storage  # type: ignore[return-value]


def get_max_upload_bytes() -> int:
    """Get the upload size limit.

    Returns:
        Limit from settings or default of 5 MiB.
    """
    return getattr(settings, 'FILEBOX_MAX_UPLOAD_BYTES', _DEFAULT_MAX_UPLOAD_BYTES)


def place_content(
    stream: BinaryIO,
    declared_name: str,
    *,
    owner_id: int,
    content_type: str | None = None,
) -> PlacedContent:
    """Durably write an upload under a fresh storage handle.

    The stream is read in chunks into a spooled temporary file while
    counting and hashing, so an oversized upload is rejected before
    anything reaches storage.

    Args:
        stream: Binary content to store.
        declared_name: Original filename (only its extension is used).
        owner_id: ID of the uploading user, used as key prefix.
        content_type: Content type declared by the client, if any.

    Returns:
        Handle, measured size, checksum and MIME type.

    Raises:
        RejectedTypeError: If the type is not accepted.
        TooLargeError: If the content exceeds the size limit.
        InvalidRequestError: If the content is empty.
        WriteFailureError: If the storage backend fails.
    """
    extension = validate_declared_type(declared_name, content_type)
    limit = get_max_upload_bytes()
    handle = generate_storage_handle(owner_id, extension)

    if stream.seekable():
        stream.seek(0)

    checksum = hashlib.sha256()
    size_bytes = 0
    with tempfile.SpooledTemporaryFile(max_size=_SPOOL_MAX_MEMORY) as spool:
        for chunk in iter(lambda: stream.read(_CHUNK_SIZE), b''):
            size_bytes += len(chunk)
            if size_bytes > limit:
                logger.warning(
                    'Upload exceeds limit of %d bytes: %s',
                    limit,
                    declared_name,
                )
                raise TooLargeError(limit)
            checksum.update(chunk)
            spool.write(chunk)

        if not size_bytes:
            raise InvalidRequestError('The submitted file is empty')

        spool.seek(0)
        saved_name = _save(handle, spool)

    logger.info(
        'Content placed: %s (%d bytes)',
        saved_name,
        size_bytes,
    )
    return PlacedContent(
        handle=saved_name,
        size_bytes=size_bytes,
        checksum_sha256=checksum.hexdigest(),
        mime_type=detect_mime_type(declared_name),
    )


def _save(handle: str, spool: BinaryIO) -> str:
    """Write spooled content to storage."""
    return _get_storage().save(handle, DjangoFile(spool, name=handle))


def open_content(handle: str) -> BinaryIO:
    """Open stored content for reading.

    Args:
        handle: Storage handle.

    Returns:
        Binary file-like object; the caller closes it.

    Raises:
        ContentMissingError: If nothing is stored under the handle.
    """
    if not content_exists(handle):
        raise ContentMissingError()
    try:
        return _get_storage().open(handle, 'rb')
    except FileNotFoundError as error:
        raise ContentMissingError() from error


def content_exists(handle: str) -> bool:
    """Check whether content is stored under the handle."""
    return _get_storage().exists(handle)


def content_modified_at(handle: str) -> datetime:
    """Get the last modification time of stored content."""
    return _get_storage().get_modified_time(handle)


def remove_content(handle: str) -> None:
    """Remove stored content.

    Idempotent: content that is already absent counts as removed.

    Args:
        handle: Storage handle.

    Raises:
        WriteFailureError: If the backend fails to remove existing content.
    """
    _get_storage().delete(handle)


def iter_stored_handles() -> Iterator[str]:
    """Yield every handle currently in storage.

    Handles live one level below the root, under the owner's ID.

    Yields:
        Storage handles.
    """
    storage = _get_storage()
    try:
        owner_dirs, _ = storage.listdir('')
    except FileNotFoundError:
        # Nothing was ever stored
        return

    for owner_dir in owner_dirs:
        _, names = storage.listdir(owner_dir)
        for name in names:
            yield f'{owner_dir}/{name}'
