"""Profiles app models.

Defines the Profile model that extends the auth identity with the display
name, postal address and role (admin/store_owner/user). The profile shares
its primary key with the identity, so `profile.pk == user.id`.
"""

from django.conf import settings
from django.core.validators import MaxLengthValidator, MinLengthValidator
from django.db import models


class Profile(models.Model):
    """
    Profile for a single identity.

    Exactly one profile exists per registered identity. It is created by the
    registration service and removed together with its identity.
    """

    class Role(models.TextChoices):
        ADMIN = "admin", "admin"
        STORE_OWNER = "store_owner", "store_owner"
        USER = "user", "user"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="profile",
    )
    name = models.CharField(
        max_length=60,
        validators=[MinLengthValidator(20), MaxLengthValidator(60)],
    )
    address = models.CharField(max_length=400, validators=[MaxLengthValidator(400)])
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.USER)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "profiles"
        ordering = ["name", "user_id"]

    @property
    def email(self) -> str:
        return self.user.email or ""

    def __str__(self):
        """Readable representation for admin and debugging."""
        return f"Profile<{self.user_id}:{self.name} {self.role}>"
