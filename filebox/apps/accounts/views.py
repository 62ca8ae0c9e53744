"""JSON endpoints for signup, login, logout and the current user."""

from http import HTTPStatus

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_POST

from filebox.apps.accounts.decorators import principal_required
from filebox.apps.accounts.forms import LoginForm, SignupForm
from filebox.apps.accounts.logic.identity_operations import (
    register_user,
    verify_credentials,
)
from filebox.apps.accounts.logic.session_manager import end_session, start_session
from filebox.apps.accounts.principal import Principal
from filebox.apps.accounts.serializers import serialize_principal
from filebox.apps.core.http import clean_form, parse_json_body


@require_POST
def signup(request: HttpRequest) -> JsonResponse:
    """Register a new user."""
    data = clean_form(SignupForm(parse_json_body(request)))
    user_id = register_user(
        username=data['username'],
        email=data['email'],
        raw_password=data['password'],
    )
    return JsonResponse(
        {'message': 'User created!', 'userId': user_id},
        status=HTTPStatus.CREATED,
    )


@require_POST
def login(request: HttpRequest) -> JsonResponse:
    """Verify credentials and start a session."""
    data = clean_form(LoginForm(parse_json_body(request)))
    user = verify_credentials(data['username'], data['password'])
    principal = start_session(request, user)
    return JsonResponse({
        'message': 'Logged in!',
        'user': serialize_principal(principal),
    })


@require_POST
def logout(request: HttpRequest) -> JsonResponse:
    """End the current session."""
    end_session(request)
    return JsonResponse({'message': 'Logged out!'})


@require_GET
@ensure_csrf_cookie
@principal_required
def me(request: HttpRequest, principal: Principal) -> JsonResponse:
    """Return the current user; also sets the CSRF cookie for the client."""
    return JsonResponse({'user': serialize_principal(principal)})
