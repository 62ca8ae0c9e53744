"""Management command to remove orphaned content from storage."""

import logging
from datetime import timedelta
from typing import Any, Final

from django.core.management.base import BaseCommand

from filebox.apps.files.exceptions import WriteFailureError
from filebox.apps.files.logic.orphan_operations import (
    purge_orphan,
    record_unreferenced_content,
)
from filebox.apps.files.models import OrphanedContent

_DEFAULT_BATCH_SIZE: Final = 1000
_DEFAULT_GRACE_MINUTES: Final = 60

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Remove content recorded as orphaned, optionally scanning first."""

    help = 'Remove orphaned content from storage'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be removed without removing',
        )
        parser.add_argument(
            '--batch-size',
            type=int,
            default=_DEFAULT_BATCH_SIZE,
            help=f'Max orphans to process (default: {_DEFAULT_BATCH_SIZE})',
        )
        parser.add_argument(
            '--scan',
            action='store_true',
            help='First record stored content that no file refers to',
        )
        parser.add_argument(
            '--grace-minutes',
            type=int,
            default=_DEFAULT_GRACE_MINUTES,
            help=(
                'Skip unreferenced content younger than this when scanning '
                f'(default: {_DEFAULT_GRACE_MINUTES})'
            ),
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the sweep.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        dry_run = options['dry_run']
        batch_size = options['batch_size']

        if options['scan'] and not dry_run:
            grace = timedelta(minutes=options['grace_minutes'])
            found = record_unreferenced_content(grace)
            self.stdout.write(f'Scan recorded {found} unreferenced objects')

        orphans = OrphanedContent.objects.order_by(
            'attempts',
            'recorded_at',
        )[:batch_size]

        count = 0
        failed = 0

        for orphan in orphans:
            if dry_run:
                self.stdout.write(
                    f'Would remove: {orphan.storage_handle} '
                    f'(reason: {orphan.reason}, attempts: {orphan.attempts})',
                )
                count += 1
                continue

            try:
                purge_orphan(orphan.id)
            except (WriteFailureError, OrphanedContent.DoesNotExist) as exc:
                self.stderr.write(
                    f'Failed to remove {orphan.storage_handle}: {exc}',
                )
                logger.exception(
                    'Failed to purge orphaned content: %s',
                    orphan.storage_handle,
                )
                failed += 1
            else:
                count += 1

        if dry_run:
            self.stdout.write(
                self.style.SUCCESS(f'Would remove {count} orphaned objects'),
            )
        else:
            self.stdout.write(
                self.style.SUCCESS(
                    f'Removed {count} orphaned objects, {failed} failed',
                ),
            )
