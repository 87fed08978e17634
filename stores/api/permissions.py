"""Stores API permissions.

Object-level permissions for store updates and for reading a store's
ratings together with rater details.
"""

from rest_framework.permissions import BasePermission

from profiles.api.permissions import role_of
from profiles.models import Profile


def is_assigned_owner(user, store) -> bool:
    return (
        store.owner_id is not None
        and store.owner_id == user.id
        and role_of(user) == Profile.Role.STORE_OWNER
    )


class IsAdminOrStoreOwner(BasePermission):
    """Allow access to admins and to the store owner assigned to the store."""

    message = "Only admins or the store's owner may perform this action."

    def has_object_permission(self, request, view, obj):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return role_of(user) == Profile.Role.ADMIN or is_assigned_owner(user, obj)
