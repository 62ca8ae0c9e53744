"""Multipart upload handler enforcing the upload size limit."""

import logging
from typing_extensions import override

from django.core.files.uploadhandler import FileUploadHandler, SkipFile
from django.http import HttpRequest

from filebox.apps.files.infrastructure.object_store import get_max_upload_bytes

logger = logging.getLogger(__name__)


class SizeLimitUploadHandler(FileUploadHandler):
    """Skip any uploaded file once it grows past the size limit.

    Must come first in ``FILE_UPLOAD_HANDLERS`` so later handlers
    never buffer the oversized part. A skipped file is missing from
    ``request.FILES``; views check ``exceeded`` to tell that apart from
    a request without a file.
    """

    def __init__(self, request: HttpRequest | None = None) -> None:
        super().__init__(request)
        self.limit = get_max_upload_bytes()
        self.exceeded = False

    @override
    def receive_data_chunk(self, raw_data: bytes, start: int) -> bytes:
        if start + len(raw_data) > self.limit:
            logger.warning(
                'Skipping upload over %d bytes: %s',
                self.limit,
                self.file_name,
            )
            self.exceeded = True
            raise SkipFile()
        return raw_data

    @override
    def file_complete(self, file_size: int) -> None:
        # Later handlers build the uploaded file
        return None


def upload_limit_exceeded(request: HttpRequest) -> bool:
    """Check whether a size-limit handler skipped a file in this request."""
    return any(
        getattr(handler, 'exceeded', False)
        for handler in request.upload_handlers
    )
