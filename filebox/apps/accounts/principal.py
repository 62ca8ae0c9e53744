"""The authenticated identity passed into every file operation."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, final

if TYPE_CHECKING:
    from filebox.apps.accounts.models import User


@final
@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller: id, username and email, never the credential."""

    id: int
    username: str
    email: str

    @classmethod
    def from_user(cls, user: 'User') -> 'Principal':
        """Build a principal from a user record."""
        return cls(id=user.pk, username=user.username, email=user.email)
