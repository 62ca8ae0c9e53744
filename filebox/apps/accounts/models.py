"""Database models for accounts app."""

from typing import final

from django.contrib.auth.models import AbstractUser
from django.db import models


@final
class User(AbstractUser):
    """Registered user of the file storage service.

    Username is unique and case-sensitive (Django default). Email is
    unique as well, so one address cannot back two accounts.
    The password column only ever holds the hasher's output.
    """

    email = models.EmailField(
        'email address',
        unique=True,
    )
