"""Business logic for folder operations."""

import logging
from typing import Final

from django.db.models import QuerySet

from filebox.apps.accounts.principal import Principal
from filebox.apps.core.exceptions import InvalidRequestError
from filebox.apps.files.exceptions import NotFoundError
from filebox.apps.files.models import Folder

logger = logging.getLogger(__name__)

_NAME_MAX_LENGTH: Final = 255


def create_folder(principal: Principal, name: str) -> Folder:
    """Create a folder owned by the principal.

    Names are not unique; two folders may share one.

    Args:
        principal: Authenticated caller.
        name: Folder name (surrounding whitespace is stripped).

    Returns:
        Created Folder instance.

    Raises:
        InvalidRequestError: If the name is empty or too long.
    """
    name = name.strip()
    if not name:
        raise InvalidRequestError('Folder name is required')
    if len(name) > _NAME_MAX_LENGTH:
        raise InvalidRequestError(
            f'Folder name must be at most {_NAME_MAX_LENGTH} characters',
        )

    folder = Folder.objects.create(user_id=principal.id, name=name)
    logger.info(
        'Folder created: %s (ID: %d, user: %s)',
        name,
        folder.id,
        principal.username,
    )
    return folder


def list_folders(principal: Principal) -> QuerySet[Folder]:
    """List the principal's folders with their files.

    Args:
        principal: Authenticated caller.

    Returns:
        QuerySet of folders in creation order, files prefetched.
    """
    return Folder.objects.filter(
        user_id=principal.id,
    ).prefetch_related('files')


def get_folder(principal: Principal, folder_id: int) -> Folder:
    """Get one of the principal's folders.

    Args:
        principal: Authenticated caller.
        folder_id: Folder ID.

    Returns:
        Folder instance.

    Raises:
        NotFoundError: If absent or owned by another user.
    """
    try:
        return Folder.objects.get(id=folder_id, user_id=principal.id)
    except Folder.DoesNotExist:
        raise NotFoundError('Folder not found') from None
