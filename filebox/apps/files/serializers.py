"""JSON shapes for file, folder and usage responses.

The storage handle is internal and is never serialized.
"""

from typing import Any

from filebox.apps.files.logic.usage_operations import StorageUsage
from filebox.apps.files.models import File, Folder


def serialize_file(file_instance: File) -> dict[str, Any]:
    """Public view of a file record."""
    return {
        'id': file_instance.id,
        'name': file_instance.name,
        'size': file_instance.size_bytes,
        'mimeType': file_instance.mime_type,
        'folderId': file_instance.folder_id,
        'uploadedAt': file_instance.uploaded_at.isoformat(),
        'modifiedAt': file_instance.modified_at.isoformat(),
    }


def serialize_folder(folder: Folder) -> dict[str, Any]:
    """Public view of a folder with its files.

    Uses ``folder.files.all()`` so a prefetched queryset is not
    queried again.
    """
    return {
        'id': folder.id,
        'name': folder.name,
        'createdAt': folder.created_at.isoformat(),
        'files': [serialize_file(file_instance) for file_instance in folder.files.all()],
    }


def serialize_usage(usage: StorageUsage) -> dict[str, Any]:
    return {
        'usedBytes': usage.used_bytes,
        'fileCount': usage.file_count,
        'displayLimitBytes': usage.display_limit_bytes,
    }
