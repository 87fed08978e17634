"""Ratings API permissions.

Contains object-level permissions for rating endpoints.
"""

from rest_framework.permissions import BasePermission


class IsRatingOwner(BasePermission):
    """Allow modifications or deletion only by the rater who owns the rating."""

    message = "Only the rater may modify this rating."

    def has_object_permission(self, request, view, obj):
        user = request.user
        return bool(user and user.is_authenticated and obj.user_id == user.id)


class HasProfile(BasePermission):
    """Ratings are written on behalf of a profile; identities without one are rejected."""

    message = "Authenticated user has no profile."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, "profile", None))
