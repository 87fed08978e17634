"""Profiles API views.

Provides endpoints to list all profiles, to retrieve a single profile (by
identity id), to update the owner's own profile and to change a profile's
role. Authentication is required for all endpoints; write access is limited
to the profile owner, role changes to admins.
"""

import logging

from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.filtering import filter_and_sort, parse_list_params
from ..models import Profile
from ..services import fetch_all_profiles
from .serializers import (
    ProfileSerializer,
    ProfilePatchSerializer,
    ProfileRoleSerializer,
)
from .permissions import IsAdminRole, IsProfileOwner

logger = logging.getLogger(__name__)

PROFILE_SEARCH_FIELDS = ("name", "email", "address")
PROFILE_SORT_FIELDS = ("name", "email", "address", "role")


class ProfileListView(APIView):
    """
    API endpoint for listing all profiles.

    - GET `/api/profiles/` returns every profile. Reading is unrestricted for
      authenticated users.
    - Optional query params: `search` (name/email/address), `role`,
      `sort_by` (name/email/address/role) and `sort_order` (asc/desc).
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        params = parse_list_params(request.query_params, PROFILE_SORT_FIELDS)
        rows = ProfileSerializer(fetch_all_profiles(), many=True).data
        rows = filter_and_sort(rows, search_fields=PROFILE_SEARCH_FIELDS, **params)
        return Response(rows, status=status.HTTP_200_OK)


class ProfileView(generics.RetrieveUpdateAPIView):
    """
    API endpoint for retrieving or partially updating a single profile.

    - GET `/api/profile/{pk}/` returns the profile for the given identity id.
    - PATCH `/api/profile/{pk}/` updates name and/or address and is restricted
      to the owner of the profile.
    """

    queryset = Profile.objects.select_related("user")
    serializer_class = ProfileSerializer

    def get_permissions(self):
        """Require ownership for writes; otherwise authentication only."""
        if self.request.method in ("PATCH", "PUT"):
            return [IsAuthenticated(), IsProfileOwner()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        """Use the patch serializer for writes; the read serializer otherwise."""
        if self.request.method in ("PATCH", "PUT"):
            return ProfilePatchSerializer
        return ProfileSerializer

    def get_object(self):
        obj = get_object_or_404(self.queryset, user_id=int(self.kwargs["pk"]))
        self.check_object_permissions(self.request, obj)
        return obj

    def update(self, request, *args, **kwargs):
        """Force partial updates and return the full profile."""
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return Response(ProfileSerializer(instance).data, status=status.HTTP_200_OK)


class ProfileRoleView(APIView):
    """
    PATCH `/api/profiles/{pk}/role/` -> change a profile's role (admin only).

    Setting the role to `store_owner` assigns the stores registered under the
    profile's email; leaving `store_owner` releases its stores.
    """

    permission_classes = [IsAuthenticated, IsAdminRole]

    def patch(self, request, pk: int):
        profile = get_object_or_404(Profile.objects.select_related("user"), user_id=pk)
        serializer = ProfileRoleSerializer(profile, data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info("Profile %s role set to %s by %s", profile.pk, profile.role, request.user.pk)
        return Response(ProfileSerializer(profile).data, status=status.HTTP_200_OK)
