"""Business logic for storage usage display."""

from dataclasses import dataclass
from typing import Final, final

from django.conf import settings
from django.db.models import Count, Sum

from filebox.apps.accounts.principal import Principal
from filebox.apps.files.models import File

_DEFAULT_DISPLAY_BYTES: Final = 1024 * 1024 * 1024  # 1 GiB


@final
@dataclass(frozen=True, slots=True)
class StorageUsage:
    """Storage used by one user, with the scale shown in the UI."""

    used_bytes: int
    file_count: int
    display_limit_bytes: int


def get_display_limit() -> int:
    """Get the usage bar scale.

    Returns:
        Bytes from settings or default of 1 GiB.
    """
    return getattr(settings, 'FILEBOX_USAGE_DISPLAY_BYTES', _DEFAULT_DISPLAY_BYTES)


def get_storage_usage(principal: Principal) -> StorageUsage:
    """Sum the principal's stored bytes.

    Display only: uploads are never blocked by this number.

    Args:
        principal: Authenticated caller.

    Returns:
        Usage totals.
    """
    totals = File.objects.filter(user_id=principal.id).aggregate(
        used=Sum('size_bytes'),
        count=Count('id'),
    )
    return StorageUsage(
        used_bytes=totals['used'] or 0,
        file_count=totals['count'],
        display_limit_bytes=get_display_limit(),
    )
