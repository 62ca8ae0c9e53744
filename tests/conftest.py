"""Fixtures shared by every test."""

import pytest


@pytest.fixture(autouse=True)
def _media_root(settings, tmp_path):
    """Keep locally stored content inside the test's temp directory."""
    settings.MEDIA_ROOT = str(tmp_path / 'uploads')
