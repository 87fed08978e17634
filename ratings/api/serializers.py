"""Ratings API serializers.

Provide serializers for submitting a rating (insert or overwrite), returning
rating data and returning ratings joined with rater details.
"""

from rest_framework import serializers

from ..models import MAX_SCORE, MIN_SCORE, Rating


class RatingInputSerializer(serializers.Serializer):
    """Input serializer for submitting a rating; the rater comes from the request."""

    store = serializers.IntegerField(required=True)
    rating = serializers.IntegerField(min_value=MIN_SCORE, max_value=MAX_SCORE, required=True)


class RatingPatchSerializer(serializers.Serializer):
    """Patch serializer for updating the score only."""

    rating = serializers.IntegerField(min_value=MIN_SCORE, max_value=MAX_SCORE, required=True)


class RatingOutputSerializer(serializers.ModelSerializer):
    """Read serializer for returning a rating."""

    class Meta:
        model = Rating
        fields = [
            "id",
            "store",
            "user",
            "rating",
            "created_at",
            "updated_at",
        ]


class RaterDetailSerializer(serializers.Serializer):
    """Rating row joined with the rater's display name and email."""

    id = serializers.IntegerField()
    store_id = serializers.IntegerField()
    user_id = serializers.IntegerField()
    rating = serializers.IntegerField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    user_name = serializers.CharField()
    user_email = serializers.CharField()
