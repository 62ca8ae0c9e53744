"""Django admin configuration for accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from filebox.apps.accounts.models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    """Admin interface for User model."""

    list_display = [
        'username',
        'email',
        'is_active',
        'is_staff',
        'date_joined',
    ]

    search_fields = [
        'username',
        'email',
    ]
