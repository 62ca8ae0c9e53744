"""Django authentication backend backed by the identity store."""

from typing import Any, final

from typing_extensions import override

from django.contrib.auth.backends import ModelBackend
from django.http import HttpRequest

from filebox.apps.accounts.exceptions import AuthFailureError
from filebox.apps.accounts.logic.identity_operations import (
    load_user_by_id,
    verify_credentials,
)
from filebox.apps.accounts.models import User


@final
class IdentityStoreBackend(ModelBackend):
    """Authenticate and restore sessions through the identity store.

    Keeps ModelBackend's permission checks for the admin site.
    """

    @override
    def authenticate(
        self,
        request: HttpRequest | None,
        username: str | None = None,
        password: str | None = None,
        **kwargs: Any,
    ) -> User | None:
        """Verify credentials for ``django.contrib.auth.authenticate``.

        Args:
            request: Current request, if any.
            username: Username from the login form.
            password: Plain password from the login form.
            kwargs: Other credentials (unused).

        Returns:
            The user if credentials verify, otherwise None.
        """
        if username is None or password is None:
            return None
        try:
            return verify_credentials(username, password)
        except AuthFailureError:
            return None

    @override
    def get_user(self, user_id: int) -> User | None:
        """Materialize the session's user.

        Args:
            user_id: Primary key stored in the session.

        Returns:
            Active user, or None.
        """
        return load_user_by_id(user_id)
