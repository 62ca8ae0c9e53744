"""Database models for files app."""

from typing import Final, final

from typing_extensions import override

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

# Constants for field max lengths
_NAME_MAX_LENGTH: Final = 255
_HANDLE_MAX_LENGTH: Final = 255
_MIME_TYPE_MAX_LENGTH: Final = 255
_CHECKSUM_MAX_LENGTH: Final = 64  # SHA256 hex length
_REASON_MAX_LENGTH: Final = 32


@final
class Folder(models.Model):
    """Flat, user-owned container for files.

    Folders never contain other folders. Names are free text and
    need not be unique.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='folders',
        db_index=True,
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Folder'  # type: ignore[mutable-override]
        verbose_name_plural = 'Folders'  # type: ignore[mutable-override]
        ordering = ['created_at', 'id']

        indexes = [
            models.Index(
                fields=['user', 'created_at'],
                name='folders_user_created_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user.username}:{self.name}'


@final
class File(models.Model):
    """Uploaded file: display metadata plus a handle to stored content.

    ``content.name`` is the storage handle, a key of the form
    ``{user_id}/{token}.{extension}`` generated at upload. It is
    unrelated to the display ``name`` and never leaves the server.
    """

    # Owner relationship
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='files',
        db_index=True,
    )

    # Null means unfiled
    folder = models.ForeignKey(
        Folder,
        on_delete=models.SET_NULL,
        related_name='files',
        null=True,
        blank=True,
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
        help_text='Original upload filename, shown to the user',
    )

    # upload_to='' means we control the full key
    content = models.FileField(
        upload_to='',
        max_length=_HANDLE_MAX_LENGTH,
        help_text='Storage handle: {user_id}/{token}.{extension}',
    )

    size_bytes = models.BigIntegerField(
        help_text='File size in bytes',
    )

    mime_type = models.CharField(
        max_length=_MIME_TYPE_MAX_LENGTH,
    )

    checksum_sha256 = models.CharField(
        max_length=_CHECKSUM_MAX_LENGTH,
        help_text='SHA256 hash for integrity verification',
        db_index=True,
    )

    # Timestamps
    uploaded_at = models.DateTimeField(auto_now_add=True)
    modified_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering = ['-uploaded_at', '-id']

        indexes = [
            # Optimize recent files queries
            models.Index(
                fields=['user', '-uploaded_at'],
                name='files_user_recent_idx',
            ),
            models.Index(
                fields=['user', 'folder'],
                name='files_user_folder_idx',
            ),
        ]

        constraints = [
            models.UniqueConstraint(
                fields=['content'],
                name='files_content_unique',
            ),
            models.CheckConstraint(
                condition=models.Q(size_bytes__gte=0),
                name='files_size_bytes_non_negative',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user.username}:{self.name}'

    @override
    def clean(self) -> None:
        """Reject a folder that belongs to another user.

        Raises:
            ValidationError: If folder and file owners differ.
        """
        super().clean()
        if self.folder_id is not None and self.folder.user_id != self.user_id:
            raise ValidationError(
                {'folder': 'Folder must belong to the file owner.'},
            )

    @property
    def storage_handle(self) -> str:
        """Key of the stored content."""
        return self.content.name


@final
class OrphanedContent(models.Model):
    """Stored content with no file record, waiting to be swept.

    Rows are written when content could not be removed right away
    (failed upload rollback, failed removal after delete) or when a
    storage scan finds unreferenced keys. The sweep removes the content
    and then the row.
    """

    class Reason(models.TextChoices):
        """Why the content was orphaned."""

        UPLOAD_ROLLBACK = 'upload_rollback', 'Upload rollback failed'
        DELETE = 'delete', 'Removal after delete failed'
        UNREFERENCED = 'unreferenced', 'Found by storage scan'

    storage_handle = models.CharField(
        max_length=_HANDLE_MAX_LENGTH,
        unique=True,
    )

    reason = models.CharField(
        max_length=_REASON_MAX_LENGTH,
        choices=Reason.choices,
    )

    attempts = models.PositiveIntegerField(
        default=0,
        help_text='Failed sweep attempts',
    )

    recorded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Orphaned content'  # type: ignore[mutable-override]
        verbose_name_plural = 'Orphaned content'  # type: ignore[mutable-override]
        ordering = ['recorded_at', 'id']

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.storage_handle} ({self.reason})'
