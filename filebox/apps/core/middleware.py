"""Middleware rendering typed service failures."""

import logging
from collections.abc import Callable
from http import HTTPStatus

from django.http import HttpRequest, HttpResponse

from filebox.apps.core.exceptions import FileboxError
from filebox.apps.core.http import error_response, status_for

logger = logging.getLogger(__name__)


class ServiceErrorMiddleware:
    """Convert ``FileboxError`` raised by views into JSON responses.

    Other exceptions are left to Django's default handling.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: Next handler in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Pass the request through."""
        return self.get_response(request)

    def process_exception(
        self,
        request: HttpRequest,
        exception: Exception,
    ) -> HttpResponse | None:
        """Render a typed failure, or defer to Django.

        Args:
            request: Current request.
            exception: Exception raised by the view.

        Returns:
            JSON error response for ``FileboxError``, otherwise None.
        """
        if not isinstance(exception, FileboxError):
            return None

        status = status_for(exception)
        if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error(
                '%s %s failed: %s',
                request.method,
                request.path,
                exception.kind,
                exc_info=exception,
            )
        else:
            logger.warning(
                '%s %s rejected: %s (%s)',
                request.method,
                request.path,
                exception.kind,
                exception.message,
            )
        return error_response(exception)
