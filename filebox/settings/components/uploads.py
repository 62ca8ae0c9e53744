"""Upload limits and storage usage display settings."""

from filebox.settings.components import config

# Largest accepted upload (5 MiB)
FILEBOX_MAX_UPLOAD_BYTES = config(
    'FILEBOX_MAX_UPLOAD_BYTES',
    cast=int,
    default=5 * 1024 * 1024,
)

# Usage bar scale shown to users; never enforced (1 GiB)
FILEBOX_USAGE_DISPLAY_BYTES = config(
    'FILEBOX_USAGE_DISPLAY_BYTES',
    cast=int,
    default=1024 * 1024 * 1024,
)

# Size-limiting handler runs first and skips oversized files while streaming
FILE_UPLOAD_HANDLERS = (
    'filebox.apps.files.upload_handlers.SizeLimitUploadHandler',
    'django.core.files.uploadhandler.MemoryFileUploadHandler',
    'django.core.files.uploadhandler.TemporaryFileUploadHandler',
)
