"""Smoke tests for the files admin."""

from http import HTTPStatus

import pytest
from django.contrib import admin

from filebox.apps.files.admin import FileAdmin
from filebox.apps.files.models import File, Folder, OrphanedContent


@pytest.mark.django_db
@pytest.mark.parametrize('url', [
    '/admin/files/file/',
    '/admin/files/folder/',
    '/admin/files/orphanedcontent/',
    '/admin/accounts/user/',
])
def test_changelists(admin_client, make_file, user, url):
    """Every registered model lists without errors."""
    folder = Folder.objects.create(user=user, name='Docs')
    make_file(folder=folder, size_bytes=2048)
    OrphanedContent.objects.create(
        storage_handle='1/abc.txt',
        reason=OrphanedContent.Reason.DELETE,
    )

    response = admin_client.get(url)

    assert response.status_code == HTTPStatus.OK


@pytest.mark.django_db
def test_orphans_cannot_be_added(admin_client):
    """Orphan rows are written by the service only."""
    response = admin_client.get('/admin/files/orphanedcontent/add/')

    assert response.status_code == HTTPStatus.FORBIDDEN


def test_model_admin_accepts_type_arguments():
    """Admin classes can be parametrized by their model at runtime."""
    assert admin.ModelAdmin[File] is not None
    assert isinstance(admin.site._registry[File], FileAdmin)
