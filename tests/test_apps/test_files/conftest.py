"""Shared fixtures for files app tests."""

import secrets

import boto3
import pytest
from django.contrib.auth import get_user_model
from django.core.files.base import ContentFile
from moto import mock_aws

from filebox.apps.accounts.principal import Principal
from filebox.apps.files.models import File

User = get_user_model()


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        username='testuser',
        password='testpass123',
        email='test@example.com',
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        username='otheruser',
        password='testpass123',
        email='other@example.com',
    )


@pytest.fixture
def principal(user):
    return Principal.from_user(user)


@pytest.fixture
def other_principal(other_user):
    return Principal.from_user(other_user)


@pytest.fixture
def mock_s3(settings):
    """Mock S3 service and switch the default storage to it.

    Yields:
        boto3 S3 resource with the filebox bucket created.
    """
    with mock_aws():
        conn = boto3.resource('s3', region_name='us-east-1')
        conn.create_bucket(Bucket='filebox')

        settings.STORAGES = {
            **settings.STORAGES,
            'default': {
                'BACKEND': (
                    'filebox.apps.files.infrastructure.storage.S3FileStorage'
                ),
                'OPTIONS': {
                    'bucket_name': 'filebox',
                    'access_key': 'testing',
                    'secret_key': 'testing',
                    'region_name': 'us-east-1',
                    'file_overwrite': False,
                    'default_acl': None,
                },
            },
        }
        yield conn


@pytest.fixture
def sample_file_content():
    """Sample file content for testing.

    Returns:
        ContentFile with test data.
    """
    return ContentFile(b'test file content', name='test.txt')


@pytest.fixture
def make_file(user):
    """Factory for File rows without stored content."""

    def factory(owner=None, **kwargs):
        owner = owner or user
        defaults = {
            'name': 'report.pdf',
            'content': f'{owner.id}/{secrets.token_hex(16)}.pdf',
            'size_bytes': 100,
            'mime_type': 'application/pdf',
            'checksum_sha256': 'a' * 64,
        }
        defaults.update(kwargs)
        return File.objects.create(user=owner, **defaults)

    return factory
