"""Session management: issuing sessions and resolving the principal."""

import logging

from django.contrib.auth import login, logout
from django.http import HttpRequest

from filebox.apps.accounts.exceptions import UnauthenticatedError
from filebox.apps.accounts.models import User
from filebox.apps.accounts.principal import Principal

logger = logging.getLogger(__name__)


def start_session(request: HttpRequest, user: User) -> Principal:
    """Issue a session for a verified user.

    The session key is rotated on login.

    Args:
        request: Current request (must have a session).
        user: User returned by credential verification.

    Returns:
        Principal for the new session.
    """
    login(request, user)
    logger.info('Session started for user %s', user.username)
    return Principal.from_user(user)


def end_session(request: HttpRequest) -> None:
    """End the current session, if any.

    Always succeeds; ending an anonymous session is a no-op flush.

    Args:
        request: Current request.
    """
    principal = get_current_principal(request)
    logout(request)
    if principal is not None:
        logger.info('Session ended for user %s', principal.username)


def get_current_principal(request: HttpRequest) -> Principal | None:
    """Resolve the principal attached to the request's session.

    Args:
        request: Current request (processed by AuthenticationMiddleware).

    Returns:
        Principal, or None for anonymous requests.
    """
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return None
    return Principal.from_user(user)


def require_principal(request: HttpRequest) -> Principal:
    """Resolve the principal or reject the request.

    Args:
        request: Current request.

    Returns:
        Principal of the authenticated caller.

    Raises:
        UnauthenticatedError: If the request has no valid session.
    """
    principal = get_current_principal(request)
    if principal is None:
        raise UnauthenticatedError()
    return principal
