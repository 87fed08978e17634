"""Profile data access."""

from common.exceptions import NotFound
from .models import Profile


def fetch_profile(identity_id) -> Profile:
    """Return the profile of the given identity or raise NotFound."""
    try:
        return Profile.objects.select_related("user").get(user_id=identity_id)
    except Profile.DoesNotExist:
        raise NotFound("Profile not found.")


def fetch_all_profiles():
    """Return every profile with its identity joined; no filtering."""
    return list(Profile.objects.select_related("user").order_by("name", "user_id"))
