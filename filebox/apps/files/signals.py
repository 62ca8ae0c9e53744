"""Signal handlers for files app."""

import logging
from functools import partial

from django.db import transaction
from django.db.models.signals import post_delete
from django.dispatch import receiver

from filebox.apps.files.logic.orphan_operations import discard_content
from filebox.apps.files.models import File, OrphanedContent

logger = logging.getLogger(__name__)


@receiver(post_delete, sender=File)
def discard_deleted_file_content(
    sender: type[File],
    instance: File,
    **kwargs: object,
) -> None:
    """Remove stored content once a File deletion commits.

    Applies to every deletion path (API, admin, ORM, user cascade).
    If removal fails the content is marked for ``sweep_orphans``.

    Args:
        sender: The File model class.
        instance: The File instance being deleted.
        **kwargs: Additional signal arguments.
    """
    if not instance.content:
        return

    handle = instance.storage_handle
    logger.info('Scheduling content removal after delete: %s', handle)
    transaction.on_commit(
        partial(discard_content, handle, OrphanedContent.Reason.DELETE),
    )
