"""Store data access and rating aggregation.

The database holds raw rating rows only. Average and count per store are
computed here from a fresh read every time they are requested.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from django.db import IntegrityError, transaction

from common.exceptions import Conflict, NotFound
from ratings.models import Rating
from .models import Store

logger = logging.getLogger(__name__)

ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class RatedStore:
    """A store together with its derived rating aggregates."""

    store: Store
    average_rating: float
    total_ratings: int


# --------------------------- aggregation (pure functions) ---------------------------

def average_of(scores) -> float:
    """Arithmetic mean rounded half-up to one decimal; 0 for no scores."""
    scores = list(scores)
    if not scores:
        return 0
    mean = Decimal(sum(scores)) / Decimal(len(scores))
    return float(mean.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


def calculate_store_ratings(stores, ratings):
    """Group `ratings` (mappings with `store_id` and `rating`) by store and
    return one RatedStore per store, in the order of `stores`.

    The result depends only on the multiset of scores per store, never on
    the order of `ratings`.
    """
    scores_by_store = defaultdict(list)
    for r in ratings:
        scores_by_store[r["store_id"]].append(r["rating"])

    result = []
    for store in stores:
        scores = scores_by_store.get(store.id, [])
        result.append(RatedStore(store=store, average_rating=average_of(scores), total_ratings=len(scores)))
    return result


# ----------------------------------- queries -----------------------------------

def fetch_stores_with_ratings(owner_id=None):
    """All stores (or one owner's stores) with their rating aggregates."""
    stores = Store.objects.select_related("owner__user").order_by("name", "id")
    if owner_id is not None:
        stores = stores.filter(owner_id=owner_id)
    stores = list(stores)

    store_ids = [s.id for s in stores]
    ratings = Rating.objects.filter(store_id__in=store_ids).values("store_id", "rating") if store_ids else []
    return calculate_store_ratings(stores, list(ratings))


def fetch_store_with_ratings(store_id) -> RatedStore:
    """A single store with its aggregates; raises NotFound when absent."""
    try:
        store = Store.objects.select_related("owner__user").get(id=store_id)
    except Store.DoesNotExist:
        raise NotFound("Store not found.")
    ratings = Rating.objects.filter(store_id=store.id).values("store_id", "rating")
    return calculate_store_ratings([store], list(ratings))[0]


# ----------------------------------- writes -----------------------------------

def _email_taken(email: str, exclude_id=None) -> bool:
    qs = Store.objects.filter(email__iexact=email)
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    return qs.exists()


def create_store(data: dict) -> Store:
    """Insert a store and return the persisted row.

    Raises Conflict if another store already uses the email.
    """
    email = data.get("email", "")
    if _email_taken(email):
        logger.info("Store creation rejected, email already in use: %s", email)
        raise Conflict("A store with this email already exists.")
    try:
        with transaction.atomic():
            store = Store.objects.create(**data)
    except IntegrityError:
        raise Conflict("A store with this email already exists.")
    logger.info("Created store %s (%s)", store.id, store.email)
    return store


def update_store(store: Store, data: dict) -> Store:
    """Apply `data` to the store; raises Conflict on an email collision."""
    email = data.get("email")
    if email is not None and _email_taken(email, exclude_id=store.id):
        raise Conflict("A store with this email already exists.")
    for attr, value in data.items():
        setattr(store, attr, value)
    try:
        with transaction.atomic():
            store.save()
    except IntegrityError:
        raise Conflict("A store with this email already exists.")
    return store


def delete_store(store: Store) -> None:
    """Delete the store; its ratings are removed by cascade."""
    store_id = store.id
    store.delete()
    logger.info("Deleted store %s", store_id)
