"""Django admin configuration for files app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from filebox.apps.files.models import File, Folder, OrphanedContent


def _format_bytes(size_bytes: int) -> str:
    """Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., '1.5 MB', '234 KB').
    """
    if size_bytes < 1024:
        return f'{size_bytes} B'
    if size_bytes < 1024 * 1024:
        return f'{size_bytes / 1024:.1f} KB'
    return f'{size_bytes / (1024 * 1024):.1f} MB'


@admin.register(File)
class FileAdmin(admin.ModelAdmin[File]):
    """Admin interface for File model.

    Deleting here goes through the same post_delete signal as the API,
    so stored content is removed after commit.
    """

    list_display = [
        'name',
        'user',
        'folder',
        'size_display',
        'mime_type',
        'uploaded_at',
    ]

    list_filter = [
        'mime_type',
        'uploaded_at',
    ]

    search_fields = [
        'name',
        'user__username',
        'checksum_sha256',
    ]

    readonly_fields = [
        'content',
        'size_bytes',
        'mime_type',
        'checksum_sha256',
        'uploaded_at',
        'modified_at',
    ]

    fieldsets = (
        ('File Information', {
            'fields': ('name', 'user', 'folder'),
        }),
        ('Storage', {
            'fields': (
                'content',
                'size_bytes',
                'mime_type',
                'checksum_sha256',
            ),
        }),
        ('Timestamps', {
            'fields': ('uploaded_at', 'modified_at'),
        }),
    )

    def size_display(self, obj: File) -> str:
        """Display file size in human-readable format.

        Args:
            obj: File instance.

        Returns:
            Formatted size string.
        """
        return _format_bytes(obj.size_bytes)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[File]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('user', 'folder')


@admin.register(Folder)
class FolderAdmin(admin.ModelAdmin[Folder]):
    """Admin interface for Folder model."""

    list_display = [
        'name',
        'user',
        'file_count',
        'created_at',
    ]

    search_fields = [
        'name',
        'user__username',
    ]

    readonly_fields = ['created_at']

    def file_count(self, obj: Folder) -> int:
        """Count of files in this folder."""
        return obj.files.count()
    file_count.short_description = 'Files'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[Folder]:
        return super().get_queryset(request).select_related('user')


@admin.register(OrphanedContent)
class OrphanedContentAdmin(admin.ModelAdmin[OrphanedContent]):
    """Read-only view of content waiting for ``sweep_orphans``."""

    list_display = [
        'storage_handle',
        'reason',
        'attempts',
        'recorded_at',
    ]

    list_filter = ['reason']

    search_fields = ['storage_handle']

    readonly_fields = [
        'storage_handle',
        'reason',
        'attempts',
        'recorded_at',
    ]

    def has_add_permission(self, request: HttpRequest) -> bool:
        return False
