"""Business logic for orphaned content (mark, then sweep)."""

import logging
from datetime import timedelta

from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

from filebox.apps.files.exceptions import WriteFailureError
from filebox.apps.files.infrastructure.object_store import (
    content_modified_at,
    iter_stored_handles,
    remove_content,
)
from filebox.apps.files.models import File, OrphanedContent

logger = logging.getLogger(__name__)


def discard_content(handle: str, reason: OrphanedContent.Reason) -> bool:
    """Remove content, or mark it for the sweep if removal fails.

    Args:
        handle: Storage handle of content with no file record.
        reason: Why the content is being discarded.

    Returns:
        True if the content is gone, False if it was marked instead.
    """
    try:
        remove_content(handle)
    except WriteFailureError:
        logger.exception('Failed to remove content, marking orphan: %s', handle)
        record_orphan(handle, reason)
        return False
    return True


def record_orphan(handle: str, reason: OrphanedContent.Reason) -> None:
    """Record content for the sweep.

    A database failure here is logged; the content is then only
    recoverable by the storage scan.

    Args:
        handle: Storage handle.
        reason: Why the content is orphaned.
    """
    try:
        with transaction.atomic():
            OrphanedContent.objects.get_or_create(
                storage_handle=handle,
                defaults={'reason': reason},
            )
    except DatabaseError:
        logger.exception('Failed to record orphaned content: %s', handle)
        return
    logger.warning('Orphaned content recorded: %s (%s)', handle, reason)


def purge_orphan(orphan_id: int) -> None:
    """Remove an orphan's content, then its record.

    Content that a file record still points to is kept; only the
    orphan row is dropped.

    Args:
        orphan_id: ID of the OrphanedContent row.

    Raises:
        OrphanedContent.DoesNotExist: If the row is gone.
        WriteFailureError: If removal fails (attempts is incremented).
    """
    orphan = OrphanedContent.objects.get(id=orphan_id)
    handle = orphan.storage_handle

    if File.objects.filter(content=handle).exists():
        logger.warning('Orphan is referenced by a file, keeping content: %s', handle)
        orphan.delete()
        return

    try:
        remove_content(handle)
    except WriteFailureError:
        OrphanedContent.objects.filter(id=orphan_id).update(
            attempts=F('attempts') + 1,
        )
        raise

    orphan.delete()
    logger.info('Orphaned content purged: %s', handle)


def record_unreferenced_content(grace: timedelta) -> int:
    """Scan storage for content that no file record points to.

    Content younger than ``grace`` is skipped so in-flight uploads
    (placed but not yet recorded) are left alone.

    Args:
        grace: Minimum age of content to consider.

    Returns:
        Number of newly recorded orphans.
    """
    cutoff = timezone.now() - grace
    referenced = set(File.objects.values_list('content', flat=True))
    known = set(
        OrphanedContent.objects.values_list('storage_handle', flat=True),
    )

    recorded = 0
    for handle in iter_stored_handles():
        if handle in referenced or handle in known:
            continue
        if content_modified_at(handle) > cutoff:
            continue
        OrphanedContent.objects.create(
            storage_handle=handle,
            reason=OrphanedContent.Reason.UNREFERENCED,
        )
        recorded += 1

    if recorded:
        logger.info('Storage scan found %d unreferenced objects', recorded)
    return recorded
