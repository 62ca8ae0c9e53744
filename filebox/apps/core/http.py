"""JSON request parsing and error rendering."""

import json
from http import HTTPStatus
from typing import Any, Final

from django import forms
from django.core.exceptions import NON_FIELD_ERRORS
from django.http import HttpRequest, JsonResponse

from filebox.apps.core.exceptions import FileboxError, InvalidRequestError

# Status code for each failure kind; unknown kinds are server errors
STATUS_BY_KIND: Final = {
    'invalid_request': HTTPStatus.BAD_REQUEST,
    'duplicate_identity': HTTPStatus.CONFLICT,
    'auth_failure': HTTPStatus.UNAUTHORIZED,
    'unauthenticated': HTTPStatus.UNAUTHORIZED,
    'not_found': HTTPStatus.NOT_FOUND,
    'storage_inconsistency': HTTPStatus.NOT_FOUND,
    'rejected_type': HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
    'too_large': HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
    'write_failure': HTTPStatus.INTERNAL_SERVER_ERROR,
    'csrf_failure': HTTPStatus.FORBIDDEN,
}

_FORM_CONTENT_TYPES: Final = frozenset((
    'multipart/form-data',
    'application/x-www-form-urlencoded',
))


def status_for(error: FileboxError) -> HTTPStatus:
    """Map a failure to its HTTP status code."""
    return STATUS_BY_KIND.get(error.kind, HTTPStatus.INTERNAL_SERVER_ERROR)


def error_response(error: FileboxError) -> JsonResponse:
    """Render a failure as ``{"error": {"kind", "message"}}``.

    Args:
        error: Typed failure to render.

    Returns:
        JSON response with the mapped status code.
    """
    return JsonResponse(
        {'error': {'kind': error.kind, 'message': error.message}},
        status=status_for(error),
    )


def parse_json_body(request: HttpRequest) -> dict[str, Any]:
    """Decode a JSON object from the request body.

    An empty body, or an empty form post, decodes to an empty object.

    Raises:
        InvalidRequestError: If the body is not a JSON object.
    """
    if not request.body:
        return {}
    if request.content_type in _FORM_CONTENT_TYPES:
        if request.POST or request.FILES:
            raise InvalidRequestError('Request body must be JSON')
        return {}
    try:
        payload = json.loads(request.body)
    except (UnicodeDecodeError, json.JSONDecodeError) as error:
        raise InvalidRequestError('Request body must be valid JSON') from error
    if not isinstance(payload, dict):
        raise InvalidRequestError('Request body must be a JSON object')
    return payload


def clean_form(form: forms.Form) -> dict[str, Any]:
    """Validate a form and return its cleaned data.

    Args:
        form: Bound form.

    Returns:
        Cleaned data.

    Raises:
        InvalidRequestError: With the first validation message.
    """
    if form.is_valid():
        return form.cleaned_data
    field, messages = next(iter(form.errors.items()))
    if field == NON_FIELD_ERRORS:
        raise InvalidRequestError(messages[0])
    raise InvalidRequestError(f'{field}: {messages[0]}')
