"""Business logic for file operations."""

import logging
from dataclasses import dataclass
from typing import BinaryIO, final

from django.db import transaction
from django.db.models import QuerySet

from filebox.apps.accounts.principal import Principal
from filebox.apps.core.exceptions import InvalidRequestError
from filebox.apps.files.exceptions import (
    ContentMissingError,
    NotFoundError,
    StorageInconsistencyError,
    TooLargeError,
)
from filebox.apps.files.infrastructure.metadata import (
    handle_belongs_to,
    normalize_display_name,
)
from filebox.apps.files.infrastructure.object_store import (
    PlacedContent,
    get_max_upload_bytes,
    open_content,
    place_content,
)
from filebox.apps.files.logic.folder_operations import get_folder
from filebox.apps.files.logic.orphan_operations import discard_content
from filebox.apps.files.models import File, OrphanedContent

logger = logging.getLogger(__name__)


@final
@dataclass(frozen=True, slots=True)
class FileDownload:
    """Open content of a file plus what the response needs to send it."""

    name: str
    content: BinaryIO
    size_bytes: int
    mime_type: str


def list_files(principal: Principal) -> QuerySet[File]:
    """List the principal's files, newest first.

    Args:
        principal: Authenticated caller.

    Returns:
        QuerySet of File objects ordered by upload time descending.
    """
    return File.objects.filter(user_id=principal.id)


def get_file(principal: Principal, file_id: int) -> File:
    """Get one of the principal's files.

    Args:
        principal: Authenticated caller.
        file_id: File ID.

    Returns:
        File instance.

    Raises:
        NotFoundError: If absent or owned by another user.
    """
    try:
        return File.objects.get(id=file_id, user_id=principal.id)
    except File.DoesNotExist:
        raise NotFoundError() from None


def create_file(
    principal: Principal,
    declared_name: str,
    placed: PlacedContent,
) -> File:
    """Create the catalog record for placed content.

    Args:
        principal: Authenticated caller.
        declared_name: Display name (already normalized).
        placed: Result of placing the content.

    Returns:
        Created File instance, unfiled.

    Raises:
        InvalidRequestError: If the handle is outside the owner's prefix.
    """
    if not handle_belongs_to(principal.id, placed.handle):
        raise InvalidRequestError('Storage handle does not belong to user')

    file_instance = File.objects.create(
        user_id=principal.id,
        name=declared_name,
        content=placed.handle,
        size_bytes=placed.size_bytes,
        mime_type=placed.mime_type,
        checksum_sha256=placed.checksum_sha256,
    )
    logger.info(
        'File record created: %s (ID: %d, user: %s)',
        declared_name,
        file_instance.id,
        principal.username,
    )
    return file_instance


def upload_file(
    principal: Principal,
    stream: BinaryIO,
    declared_name: str,
    *,
    declared_size: int | None = None,
    content_type: str | None = None,
) -> File:
    """Place content in storage, then record it in the catalog.

    Content is placed first. If the record cannot be created the
    placed content is discarded (or marked for the sweep), so a failed
    upload never leaves a record without content.

    Args:
        principal: Authenticated caller.
        stream: Uploaded bytes.
        declared_name: Filename sent by the client.
        declared_size: Size reported by the client, if known.
        content_type: Content type sent by the client, if any.

    Returns:
        Created File instance.

    Raises:
        InvalidRequestError: If the name or content is empty.
        RejectedTypeError: If the type is not accepted.
        TooLargeError: If the upload exceeds the size limit.
        WriteFailureError: If storage fails.
    """
    name = normalize_display_name(declared_name)
    limit = get_max_upload_bytes()
    if declared_size is not None and declared_size > limit:
        raise TooLargeError(limit)

    placed = place_content(
        stream,
        name,
        owner_id=principal.id,
        content_type=content_type,
    )

    try:
        with transaction.atomic():
            return create_file(principal, name, placed)
    except Exception:
        logger.exception(
            'Creating file record failed, discarding content: %s',
            placed.handle,
        )
        discard_content(placed.handle, OrphanedContent.Reason.UPLOAD_ROLLBACK)
        raise


def open_file(principal: Principal, file_id: int) -> FileDownload:
    """Open a file's content for download.

    Args:
        principal: Authenticated caller.
        file_id: File ID.

    Returns:
        Open content with display name, size and MIME type.

    Raises:
        NotFoundError: If absent or owned by another user.
        StorageInconsistencyError: If the record exists but its
            content is gone.
    """
    file_instance = get_file(principal, file_id)
    try:
        content = open_content(file_instance.storage_handle)
    except ContentMissingError as error:
        logger.error(
            'File record without content: ID=%d, handle=%s',
            file_instance.id,
            file_instance.storage_handle,
        )
        raise StorageInconsistencyError() from error

    return FileDownload(
        name=file_instance.name,
        content=content,
        size_bytes=file_instance.size_bytes,
        mime_type=file_instance.mime_type,
    )


def move_file(
    principal: Principal,
    file_id: int,
    folder_id: int | None,
) -> File:
    """Put a file into one of the principal's folders, or unfile it.

    Only the record changes; stored content stays under its handle.

    Args:
        principal: Authenticated caller.
        file_id: File ID.
        folder_id: Target folder ID, or None to unfile.

    Returns:
        Updated File instance.

    Raises:
        NotFoundError: If the file or the target folder is absent or
            owned by another user.
    """
    with transaction.atomic():
        try:
            file_instance = File.objects.select_for_update().get(
                id=file_id,
                user_id=principal.id,
            )
        except File.DoesNotExist:
            raise NotFoundError() from None

        folder = None if folder_id is None else get_folder(principal, folder_id)
        file_instance.folder = folder
        file_instance.save(update_fields=['folder', 'modified_at'])

    logger.info(
        'File moved: ID=%d to folder %s (user: %s)',
        file_id,
        folder_id,
        principal.username,
    )
    return file_instance


def delete_file(principal: Principal, file_id: int) -> None:
    """Delete a file record and, after commit, its content.

    Content removal is handled by the post_delete signal in
    ``signals.py`` once the transaction commits.

    Args:
        principal: Authenticated caller.
        file_id: File ID.

    Raises:
        NotFoundError: If absent or owned by another user.
    """
    with transaction.atomic():
        deleted, _ = File.objects.filter(
            id=file_id,
            user_id=principal.id,
        ).delete()

    if not deleted:
        raise NotFoundError()
    logger.info('File deleted: ID=%d (user: %s)', file_id, principal.username)
