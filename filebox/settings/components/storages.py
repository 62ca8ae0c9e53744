"""Django storage configuration for uploaded content.

``FILEBOX_STORAGE_BACKEND`` selects where file content lives:

- ``local``: a directory on disk (``FILEBOX_MEDIA_ROOT``)
- ``s3``: any S3-compatible service via django-storages
  (MinIO for local development, AWS S3 or Cloudflare R2 in production)
"""

from typing import Any, Final

from filebox.settings.components import BASE_DIR, config

MEDIA_ROOT = config(
    'FILEBOX_MEDIA_ROOT',
    default=str(BASE_DIR.joinpath('uploads')),
)

_STORAGE_BACKEND: Final = config('FILEBOX_STORAGE_BACKEND', default='local')

if _STORAGE_BACKEND == 's3':
    _default_storage: dict[str, Any] = {
        'BACKEND': 'filebox.apps.files.infrastructure.storage.S3FileStorage',
        'OPTIONS': {
            'bucket_name': config('AWS_STORAGE_BUCKET_NAME', default='filebox'),
            'access_key': config('AWS_ACCESS_KEY_ID', default=None),
            'secret_key': config('AWS_SECRET_ACCESS_KEY', default=None),
            'endpoint_url': config(
                'AWS_S3_ENDPOINT_URL',
                default=None,
            ),
            'region_name': config(
                'AWS_S3_REGION_NAME',
                default='auto',
            ),
            'file_overwrite': False,  # Prevent accidental overwrites
            'default_acl': None,  # Inherit bucket ACL
            'querystring_auth': True,
        },
    }
else:
    # Location follows MEDIA_ROOT
    _default_storage = {
        'BACKEND': 'filebox.apps.files.infrastructure.storage.LocalFileStorage',
    }

STORAGES: Final[dict[str, dict[str, Any]]] = {
    'default': _default_storage,
    'staticfiles': {
        # Keep static files separate from user files
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}
