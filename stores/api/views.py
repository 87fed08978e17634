"""Stores API views.

List and create stores on the same endpoint; every listed store carries its
average rating and rating count, computed from a fresh read of the ratings.
Retrieve, patch and delete are provided on the store detail route. Two
sub-resources expose a store's ratings with rater details (admin or owner)
and the caller's own rating for a store.
"""

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.filtering import filter_and_sort, parse_list_params
from profiles.api.permissions import IsAdminRole, role_of
from profiles.models import Profile
from ratings.api.serializers import RaterDetailSerializer, RatingOutputSerializer
from ratings.services import fetch_store_ratings_with_rater_details, fetch_user_rating_for_store
from ..models import Store
from ..services import (
    create_store,
    delete_store,
    fetch_store_with_ratings,
    fetch_stores_with_ratings,
    update_store,
)
from .permissions import IsAdminOrStoreOwner
from .serializers import RatedStoreSerializer, StoreSerializer

STORE_SEARCH_FIELDS = ("name", "email", "address")
STORE_SORT_FIELDS = ("name", "email", "address", "average_rating", "total_ratings", "created_at")


# ----------------------------- helpers (module-level) -----------------------------

def _owner_id_param(params):
    """Parse the optional owner_id filter; raises ValidationError on bad input."""
    v = params.get("owner_id")
    if not v:
        return None
    if not v.isdigit():
        raise ValidationError({"owner_id": "Must be an integer."})
    return int(v)


def _rated_store_response(store_id, status_code=status.HTTP_200_OK):
    """Re-read the store with its aggregates and respond with it."""
    return Response(RatedStoreSerializer(fetch_store_with_ratings(store_id)).data, status=status_code)


# --------------------------------------- views ---------------------------------------

class StoreListCreateAPIView(APIView):
    """GET: list stores with aggregates (filter/search/order). POST: create (admin only)."""

    def get_permissions(self):
        """Only admins may create stores; listing needs authentication."""
        if self.request.method == "POST":
            return [IsAuthenticated(), IsAdminRole()]
        return [IsAuthenticated()]

    def get(self, request):
        owner_id = _owner_id_param(request.query_params)
        params = parse_list_params(request.query_params, STORE_SORT_FIELDS)
        params.pop("role")
        rows = RatedStoreSerializer(fetch_stores_with_ratings(owner_id=owner_id), many=True).data
        rows = filter_and_sort(rows, search_fields=STORE_SEARCH_FIELDS, **params)
        return Response(rows, status=status.HTTP_200_OK)

    def post(self, request):
        serializer = StoreSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        store = create_store(serializer.validated_data)
        return _rated_store_response(store.id, status.HTTP_201_CREATED)


class StoreDetailAPIView(APIView):
    """GET: store with aggregates. PATCH: admin or owner. DELETE: admin only."""

    def get_permissions(self):
        if self.request.method in ("PATCH", "PUT"):
            return [IsAuthenticated(), IsAdminOrStoreOwner()]
        if self.request.method == "DELETE":
            return [IsAuthenticated(), IsAdminRole()]
        return [IsAuthenticated()]

    def get_object(self, pk):
        store = get_object_or_404(Store.objects.select_related("owner__user"), pk=pk)
        self.check_object_permissions(self.request, store)
        return store

    def get(self, request, pk: int):
        return _rated_store_response(pk)

    def patch(self, request, pk: int):
        """Partially update the store and return it with fresh aggregates.

        Only admins may change the owner; a store owner cannot hand the store
        to someone else or release it.
        """
        store = self.get_object(pk)
        if "owner" in request.data and role_of(request.user) != Profile.Role.ADMIN:
            raise PermissionDenied("Only admins may change a store's owner.")
        serializer = StoreSerializer(store, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        update_store(store, serializer.validated_data)
        return _rated_store_response(store.id)

    def put(self, request, pk: int):
        return self.patch(request, pk)

    def delete(self, request, pk: int):
        """Delete the store (and its ratings) and respond with 204 No Content."""
        delete_store(self.get_object(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)


class StoreRatingsAPIView(APIView):
    """GET /api/stores/{id}/ratings/ -> ratings with rater name and email.

    Visible to admins and to the store's assigned owner.
    """

    permission_classes = [IsAuthenticated, IsAdminOrStoreOwner]

    def get(self, request, pk: int):
        store = get_object_or_404(Store, pk=pk)
        self.check_object_permissions(request, store)
        ratings = fetch_store_ratings_with_rater_details(store.id)
        return Response(RaterDetailSerializer(ratings, many=True).data, status=status.HTTP_200_OK)


class MyStoreRatingAPIView(APIView):
    """GET /api/stores/{id}/my-rating/ -> {"rating": <obj> | null}.

    A missing rating is not an error.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request, pk: int):
        store = get_object_or_404(Store, pk=pk)
        rating = fetch_user_rating_for_store(store.id, request.user.id)
        data = RatingOutputSerializer(rating).data if rating else None
        return Response({"rating": data}, status=status.HTTP_200_OK)
