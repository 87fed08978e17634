"""Ratings API views.

List and submit ratings on the same endpoint (auth required). Submitting is
an upsert on (rater, store): the first submission creates the rating, later
ones overwrite its score. The response carries the store's aggregates,
re-read after the write. Retrieve/patch/delete a single rating with
rater-only modifications.
"""

from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from stores.api.serializers import RatedStoreSerializer
from stores.services import fetch_store_with_ratings
from ..models import Rating
from ..services import upsert_rating
from .permissions import HasProfile, IsRatingOwner
from .serializers import (
    RatingInputSerializer,
    RatingOutputSerializer,
    RatingPatchSerializer,
)


# ----------------------------- helpers (module-level) -----------------------------

def _apply_filters_and_ordering(qs, params):
    """Filter by ids and apply ordering; raises ValidationError on bad input."""
    # store_id
    v = params.get("store_id")
    if v:
        if not v.isdigit():
            raise ValidationError({"store_id": "Must be an integer."})
        qs = qs.filter(store_id=int(v))

    # user_id
    v = params.get("user_id")
    if v:
        if not v.isdigit():
            raise ValidationError({"user_id": "Must be an integer."})
        qs = qs.filter(user_id=int(v))

    # ordering
    ordering = params.get("ordering")
    if ordering:
        allowed = {"updated_at", "-updated_at", "rating", "-rating"}
        if ordering not in allowed:
            raise ValidationError(
                {"ordering": "Allowed values: updated_at, -updated_at, rating, -rating."}
            )
        qs = qs.order_by(ordering, "-id")
    else:
        qs = qs.order_by("-updated_at", "-id")

    return qs


def _submission_response(rating: Rating, created: bool):
    """Return the rating and the store's freshly re-read aggregates."""
    data = {
        "rating": RatingOutputSerializer(rating).data,
        "store": RatedStoreSerializer(fetch_store_with_ratings(rating.store_id)).data,
    }
    return Response(data, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)


# --------------------------------------- views ---------------------------------------

class RatingListCreateAPIView(generics.ListCreateAPIView):
    """GET: list ratings (filter/order). POST: submit the caller's rating for a store."""

    queryset = Rating.objects.all().select_related("store", "user")

    def get_permissions(self):
        """Submitting requires a profile; reading only authentication."""
        if self.request.method == "POST":
            return [IsAuthenticated(), HasProfile()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        """Use output serializer for GET and input serializer for POST."""
        return RatingOutputSerializer if self.request.method == "GET" else RatingInputSerializer

    # --- GET ---
    def get_queryset(self):
        """Apply optional filters and ordering from query parameters."""
        return _apply_filters_and_ordering(super().get_queryset(), self.request.query_params)

    # --- POST ---
    def create(self, request, *args, **kwargs):
        """Insert or overwrite the caller's rating; 201 on insert, 200 on overwrite."""
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        rating, created = upsert_rating(
            ser.validated_data["store"], request.user.id, ser.validated_data["rating"]
        )
        return _submission_response(rating, created)


class RatingDetailAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET: any authenticated user. PATCH/DELETE: the rater only."""

    queryset = Rating.objects.all().select_related("store", "user")

    def get_permissions(self):
        if self.request.method in ("PATCH", "PUT", "DELETE"):
            return [IsAuthenticated(), IsRatingOwner()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        """Use patch serializer for writes; output serializer otherwise."""
        return RatingPatchSerializer if self.request.method in ("PATCH", "PUT") else RatingOutputSerializer

    def update(self, request, *args, **kwargs):
        """Overwrite the score through the same upsert path as submissions."""
        instance = self.get_object()
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        rating, _ = upsert_rating(instance.store_id, instance.user_id, ser.validated_data["rating"])
        return _submission_response(rating, created=False)

    def destroy(self, request, *args, **kwargs):
        """Delete the rating (rater only) and return 204 No Content."""
        instance = self.get_object()
        self.perform_destroy(instance)
        return Response(status=status.HTTP_204_NO_CONTENT)
