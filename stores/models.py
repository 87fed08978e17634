"""Stores app models.

Defines the Store model. A store can optionally be owned by a profile with
role `store_owner`; rating aggregates are derived at read time and never
stored on the row.
"""

from django.db import models


class Store(models.Model):
    """Represents a rateable business created by an admin."""

    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255, unique=True)
    address = models.CharField(max_length=400)
    owner = models.ForeignKey(
        "profiles.Profile",
        on_delete=models.SET_NULL,
        related_name="stores",
        null=True,
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "stores"
        ordering = ["name", "id"]

    def __str__(self):
        return f"{self.name} (#{self.pk})"
