"""Tests for sweep_orphans management command."""

from io import BytesIO, StringIO

import pytest
from django.core.management import call_command

from filebox.apps.files.exceptions import WriteFailureError
from filebox.apps.files.infrastructure.object_store import (
    content_exists,
    place_content,
)
from filebox.apps.files.models import OrphanedContent


@pytest.mark.django_db
class TestSweepOrphansCommand:
    """Tests for sweep_orphans management command."""

    def _orphan(self, owner_id, reason=OrphanedContent.Reason.DELETE):
        placed = place_content(BytesIO(b'left'), 'left.txt', owner_id=owner_id)
        return OrphanedContent.objects.create(
            storage_handle=placed.handle,
            reason=reason,
        )

    def test_sweep_removes_orphans(self, user):
        """Test sweep removes recorded content and rows."""
        orphan = self._orphan(user.id)

        out = StringIO()
        call_command('sweep_orphans', stdout=out)

        assert not content_exists(orphan.storage_handle)
        assert not OrphanedContent.objects.exists()
        assert 'Removed 1 orphaned objects, 0 failed' in out.getvalue()

    def test_dry_run_removes_nothing(self, user):
        """Test --dry-run only reports."""
        orphan = self._orphan(user.id)

        out = StringIO()
        call_command('sweep_orphans', '--dry-run', stdout=out)

        assert content_exists(orphan.storage_handle)
        assert OrphanedContent.objects.exists()
        assert f'Would remove: {orphan.storage_handle}' in out.getvalue()
        assert 'Would remove 1 orphaned objects' in out.getvalue()

    def test_batch_size(self, user):
        """Test --batch-size limits the work per run."""
        for _ in range(3):
            self._orphan(user.id)

        call_command('sweep_orphans', '--batch-size', '2', stdout=StringIO())

        assert OrphanedContent.objects.count() == 1

    def test_failures_are_counted(self, user, monkeypatch):
        """Test a failing removal is reported and the row kept."""
        orphan = self._orphan(user.id)

        def failing_remove(handle):
            raise WriteFailureError()

        monkeypatch.setattr(
            'filebox.apps.files.logic.orphan_operations.remove_content',
            failing_remove,
        )

        out = StringIO()
        err = StringIO()
        call_command('sweep_orphans', stdout=out, stderr=err)

        orphan.refresh_from_db()
        assert orphan.attempts == 1
        assert 'Removed 0 orphaned objects, 1 failed' in out.getvalue()
        assert orphan.storage_handle in err.getvalue()

    def test_scan_records_and_removes_unreferenced(self, user):
        """Test --scan finds content without a record."""
        placed = place_content(BytesIO(b'stray'), 'stray.txt', owner_id=user.id)

        out = StringIO()
        call_command(
            'sweep_orphans',
            '--scan',
            '--grace-minutes',
            '0',
            stdout=out,
        )

        assert not content_exists(placed.handle)
        assert 'Scan recorded 1 unreferenced objects' in out.getvalue()

    def test_scan_skips_recent_content(self, user):
        """Test the grace period protects in-flight uploads."""
        placed = place_content(BytesIO(b'new'), 'new.txt', owner_id=user.id)

        call_command('sweep_orphans', '--scan', stdout=StringIO())

        assert content_exists(placed.handle)
