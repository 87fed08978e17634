"""Rating data access.

Writes go through `upsert_rating`, keyed on the (user, store) pair. Callers
re-read store aggregates after every write instead of adjusting them locally.
"""

import logging

from common.exceptions import NotFound, ValidationError
from stores.models import Store
from .models import MAX_SCORE, MIN_SCORE, Rating

logger = logging.getLogger(__name__)


def validate_score(score) -> int:
    """Return the score as int or raise ValidationError if it is not in [1, 5]."""
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError({"rating": "Rating must be an integer."})
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ValidationError({"rating": f"Rating must be between {MIN_SCORE} and {MAX_SCORE}."})
    return score


def upsert_rating(store_id, user_id, score):
    """Insert the user's rating for the store or overwrite the existing one.

    Returns `(rating, created)`.
    """
    score = validate_score(score)
    if not Store.objects.filter(id=store_id).exists():
        raise NotFound("Store not found.")
    rating, created = Rating.objects.update_or_create(
        store_id=store_id,
        user_id=user_id,
        defaults={"rating": score},
    )
    logger.debug("Rating %s by %s for store %s: %s", "created" if created else "updated", user_id, store_id, score)
    return rating, created


def fetch_user_rating_for_store(store_id, user_id):
    """The user's rating for the store, or None if there is none."""
    return Rating.objects.filter(store_id=store_id, user_id=user_id).first()


def fetch_store_ratings_with_rater_details(store_id):
    """All ratings of a store, each joined with the rater's name and email."""
    ratings = (
        Rating.objects.filter(store_id=store_id)
        .select_related("user__user")
        .order_by("-created_at", "-id")
    )
    return [
        {
            "id": r.id,
            "store_id": r.store_id,
            "user_id": r.user_id,
            "rating": r.rating,
            "created_at": r.created_at,
            "updated_at": r.updated_at,
            "user_name": r.user.name,
            "user_email": r.user.email,
        }
        for r in ratings
    ]


def rating_distribution(scores) -> dict:
    """Count scores per star value; every value from 1 to 5 is present."""
    counts = {value: 0 for value in range(MIN_SCORE, MAX_SCORE + 1)}
    for score in scores:
        if score in counts:
            counts[score] += 1
    return counts
