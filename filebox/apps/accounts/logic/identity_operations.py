"""Business logic for user registration and credential checks."""

import logging

from django.db import IntegrityError, transaction
from django.db.models import Q

from filebox.apps.accounts.exceptions import (
    AuthFailureError,
    AuthFailureReason,
    DuplicateIdentityError,
)
from filebox.apps.accounts.models import User

logger = logging.getLogger(__name__)


def register_user(username: str, email: str, raw_password: str) -> int:
    """Create a user with a hashed credential.

    The duplicate check and the insert share one transaction; a
    uniqueness violation from a concurrent signup is reported the same
    way as one found by the check.

    Args:
        username: Desired username (case-sensitive).
        email: Email address (compared case-insensitively).
        raw_password: Plain password; only its hash is stored.

    Returns:
        ID of the new user.

    Raises:
        DuplicateIdentityError: If the username or email is taken.
    """
    email = User.objects.normalize_email(email)

    try:
        with transaction.atomic():
            taken = User.objects.filter(
                Q(username=username) | Q(email__iexact=email),
            ).exists()
            if taken:
                raise DuplicateIdentityError()

            user = User.objects.create_user(
                username=username,
                email=email,
                password=raw_password,
            )
    except IntegrityError as error:
        logger.warning('Signup raced on unique constraint: %s', username)
        raise DuplicateIdentityError() from error
    except DuplicateIdentityError:
        logger.warning('Signup rejected, identity taken: %s', username)
        raise

    logger.info('User registered: %s (ID: %d)', username, user.pk)
    return user.pk


def verify_credentials(username: str, raw_password: str) -> User:
    """Check a username and password.

    Args:
        username: Username to look up.
        raw_password: Plain password to check.

    Returns:
        The matching active user.

    Raises:
        AuthFailureError: With the internal reason for the failure.
    """
    try:
        user = User.objects.get(username=username)
    except User.DoesNotExist:
        # Run the hasher once so a missing user costs the same time
        User().set_password(raw_password)
        logger.warning('Login failed, unknown user: %s', username)
        raise AuthFailureError(AuthFailureReason.NOT_FOUND) from None

    if not user.check_password(raw_password):
        logger.warning('Login failed, wrong password: %s', username)
        raise AuthFailureError(AuthFailureReason.WRONG_PASSWORD)

    if not user.is_active:
        logger.warning('Login failed, inactive user: %s', username)
        raise AuthFailureError(AuthFailureReason.INACTIVE)

    return user


def load_user_by_id(user_id: int) -> User | None:
    """Load an active user for an established session.

    Args:
        user_id: Primary key stored in the session.

    Returns:
        The user, or None if absent or deactivated.
    """
    return User.objects.filter(pk=user_id, is_active=True).first()
