"""Profiles API permissions.

Contains the role-based permission classes shared by all apps and the
object-level permission for profile self-edits.
"""

from rest_framework.permissions import BasePermission, SAFE_METHODS

from ..models import Profile


def role_of(user) -> str:
    """Return the role of the user's profile, or '' for anonymous/profile-less users."""
    if not user or not user.is_authenticated:
        return ""
    profile = getattr(user, "profile", None)
    return getattr(profile, "role", "") if profile else ""


class HasRole(BasePermission):
    """Allow access only to authenticated users whose profile has `required_role`."""

    required_role = ""
    message = "You do not have the required role."

    def has_permission(self, request, view):
        return role_of(request.user) == self.required_role


class IsAdminRole(HasRole):
    required_role = Profile.Role.ADMIN
    message = "Only admins may perform this action."


class IsStoreOwnerRole(HasRole):
    required_role = Profile.Role.STORE_OWNER
    message = "Only store owners may perform this action."


class IsUserRole(HasRole):
    required_role = Profile.Role.USER
    message = "Only users with role 'user' may perform this action."


class IsProfileOwner(BasePermission):
    """
    Object-level permission that allows write access only to the profile owner.

    - SAFE methods (GET/HEAD/OPTIONS) are always allowed.
    - For write methods (e.g., PATCH), the user must be authenticated and
      match the profile's identity (`obj.user_id == request.user.id`).
    """

    message = "You may only modify your own profile."

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        return request.user.is_authenticated and obj.user_id == request.user.id
