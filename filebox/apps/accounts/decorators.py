"""View decorators for the access gateway."""

import functools
from collections.abc import Callable
from typing import Any

from django.http import HttpRequest, HttpResponse

from filebox.apps.accounts.logic.session_manager import require_principal


def principal_required(
    view: Callable[..., HttpResponse],
) -> Callable[..., HttpResponse]:
    """Resolve the principal before calling the view.

    The wrapped view receives the principal right after the request.
    Anonymous requests raise ``UnauthenticatedError``, which the error
    middleware renders as 401.
    """

    @functools.wraps(view)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        principal = require_principal(request)
        return view(request, principal, *args, **kwargs)

    wrapper.requires_principal = True  # type: ignore[attr-defined]
    return wrapper
