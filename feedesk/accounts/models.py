"""
accounts/models.py
──────────────────
Identity and authentication.

User – extends AbstractUser; administrators sign in with their email address.
"""

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Dashboard administrator.

    Extends Django's built-in AbstractUser so we keep the standard password
    hashing and admin integration, and adds a display `name` plus a `role`.
    The email address is unique and is what people type on the login page.
    """

    class Role(models.TextChoices):
        ADMIN = 'admin', 'Administrator'
        STAFF = 'staff', 'Staff'

    email = models.EmailField(
        unique=True,
        verbose_name='email address',
    )
    name = models.CharField(
        max_length=200,
        blank=True,
        help_text='Display name shown on the dashboard.',
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.ADMIN,
    )

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    class Meta:
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self):
        return f"{self.name or self.email} ({self.get_role_display()})"
