"""Ratings app models.

Defines the Rating model. A user can leave at most one rating per store;
submitting again overwrites the existing row. Scores are constrained
between 1 and 5.
"""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

MIN_SCORE = 1
MAX_SCORE = 5


class Rating(models.Model):
    """Represents one user's score for one store."""

    user = models.ForeignKey(
        "profiles.Profile",
        on_delete=models.CASCADE,
        related_name="ratings",
    )
    store = models.ForeignKey(
        "stores.Store",
        on_delete=models.CASCADE,
        related_name="ratings",
    )

    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_SCORE), MaxValueValidator(MAX_SCORE)]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "ratings"
        constraints = [
            models.UniqueConstraint(
                fields=["user", "store"],
                name="unique_rating_per_user_and_store",
            ),
            models.CheckConstraint(
                condition=models.Q(rating__gte=MIN_SCORE) & models.Q(rating__lte=MAX_SCORE),
                name="rating_between_1_and_5",
            ),
        ]
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"Rating<{self.id} {self.user_id}->{self.store_id} {self.rating}>"
