"""JSON shapes for account responses."""

from typing import Any

from filebox.apps.accounts.principal import Principal


def serialize_principal(principal: Principal) -> dict[str, Any]:
    """Public view of the caller; never includes the credential."""
    return {
        'id': principal.id,
        'username': principal.username,
        'email': principal.email,
    }
