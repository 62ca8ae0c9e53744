"""Service-wide views."""

import logging

from django.http import HttpRequest, HttpResponse
from django.views import csrf

from filebox.apps.accounts.exceptions import UnauthenticatedError
from filebox.apps.accounts.logic.session_manager import get_current_principal
from filebox.apps.core.exceptions import CsrfFailureError
from filebox.apps.core.http import error_response

logger = logging.getLogger(__name__)

_JSON_NAMESPACES = frozenset(('accounts', 'files'))


def csrf_failure(request: HttpRequest, reason: str = '') -> HttpResponse:
    """Render CSRF rejections on the JSON API as typed failures.

    Anonymous calls to routes that need a session get 401, like they
    would with a valid token. Other pages keep Django's HTML response.
    """
    match = request.resolver_match
    if match is None or match.namespace not in _JSON_NAMESPACES:
        return csrf.csrf_failure(request, reason)

    logger.warning('%s %s rejected: %s', request.method, request.path, reason)
    if getattr(match.func, 'requires_principal', False):
        if get_current_principal(request) is None:
            return error_response(UnauthenticatedError())
    return error_response(CsrfFailureError())
