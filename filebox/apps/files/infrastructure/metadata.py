"""Metadata helpers: accepted types, display names, storage handles."""

import mimetypes
import secrets
from pathlib import Path, PurePosixPath
from typing import Final

from filebox.apps.core.exceptions import InvalidRequestError
from filebox.apps.files.exceptions import RejectedTypeError

# Accepted extensions and the MIME types a client may declare for them.
# The first entry is the canonical type stored on the record.
ACCEPTED_CONTENT_TYPES: Final[dict[str, tuple[str, ...]]] = {
    'jpeg': ('image/jpeg', 'image/pjpeg'),
    'jpg': ('image/jpeg', 'image/pjpeg'),
    'png': ('image/png',),
    'gif': ('image/gif',),
    'pdf': ('application/pdf',),
    'txt': ('text/plain',),
    'doc': ('application/msword',),
    'docx': (
        'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    ),
}

# Declared types that carry no information about the content
_GENERIC_CONTENT_TYPES: Final = frozenset((
    'application/octet-stream',
    'binary/octet-stream',
))

_NAME_MAX_LENGTH: Final = 255
_HANDLE_TOKEN_BYTES: Final = 16  # 32 hex chars


def get_file_extension(filename: str) -> str:
    """Get file extension from filename.

    Args:
        filename: Filename (e.g., 'document.PDF').

    Returns:
        Extension without dot, lowercase (e.g., 'pdf').
        Returns empty string if no extension.
    """
    extension = Path(filename).suffix
    return extension.lstrip('.').lower()


def detect_mime_type(filename: str) -> str:
    """Detect MIME type from the filename extension.

    Accepted extensions map to their canonical type; anything else
    falls back to the ``mimetypes`` guess.

    Args:
        filename: Filename with extension.

    Returns:
        MIME type string (e.g., 'image/jpeg', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    accepted = ACCEPTED_CONTENT_TYPES.get(get_file_extension(filename))
    if accepted:
        return accepted[0]
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return 'application/octet-stream'
    return mime_type


def validate_declared_type(
    declared_name: str,
    content_type: str | None = None,
) -> str:
    """Check an upload's extension and declared content type.

    Args:
        declared_name: Original filename sent by the client.
        content_type: Content type sent by the client, if any.

    Returns:
        Accepted extension (lowercase, without dot).

    Raises:
        RejectedTypeError: If the extension is not accepted, or the
            declared content type contradicts it.
    """
    extension = get_file_extension(declared_name)
    accepted = ACCEPTED_CONTENT_TYPES.get(extension)
    if accepted is None:
        raise RejectedTypeError()

    if content_type:
        declared = content_type.split(';', 1)[0].strip().lower()
        if declared not in accepted and declared not in _GENERIC_CONTENT_TYPES:
            raise RejectedTypeError()

    return extension


def normalize_display_name(declared_name: str) -> str:
    """Reduce a client-supplied filename to a safe display name.

    Drops any directory part (including Windows-style paths) and
    surrounding whitespace.

    Args:
        declared_name: Original filename sent by the client.

    Returns:
        Display name, at most 255 characters.

    Raises:
        InvalidRequestError: If nothing usable remains.
    """
    name = PurePosixPath(declared_name.replace('\\', '/')).name.strip()
    if not name:
        raise InvalidRequestError('File name is required')
    if len(name) > _NAME_MAX_LENGTH:
        path = Path(name)
        name = path.stem[:_NAME_MAX_LENGTH - len(path.suffix)] + path.suffix
    return name


def generate_storage_handle(owner_id: int, extension: str) -> str:
    """Generate a fresh storage key for an upload.

    The key is a random token under the owner's prefix and carries no
    part of the user-supplied name.

    Args:
        owner_id: ID of the uploading user.
        extension: Accepted extension.

    Returns:
        Handle such as '12/9f86d081884c7d659a2feaa0c55ad015.pdf'.
    """
    token = secrets.token_hex(_HANDLE_TOKEN_BYTES)
    return f'{owner_id}/{token}.{extension}'


def handle_belongs_to(owner_id: int, handle: str) -> bool:
    """Check that a storage handle sits under the owner's prefix.

    Args:
        owner_id: Expected owner's user ID.
        handle: Storage handle.

    Returns:
        True if the handle is ``{owner_id}/{name}`` with no traversal.
    """
    parts = PurePosixPath(handle).parts
    if len(parts) != 2 or '..' in parts:
        return False
    return parts[0] == str(owner_id)
