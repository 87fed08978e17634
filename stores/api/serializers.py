"""Stores API serializers.

Provide serializers for creating and updating stores (owner must be a
store owner) and for representing a store together with its derived rating
aggregates.
"""

from rest_framework import serializers

from profiles.models import Profile
from ..models import Store


class StoreSerializer(serializers.ModelSerializer):
    """Input serializer for store creation and partial updates.

    Email uniqueness is checked by the store service, which answers with
    409 Conflict instead of a field error.
    """

    name = serializers.CharField(max_length=255)
    email = serializers.EmailField(max_length=255)
    address = serializers.CharField(max_length=400)
    owner = serializers.PrimaryKeyRelatedField(
        queryset=Profile.objects.select_related("user"),
        required=False,
        allow_null=True,
    )

    class Meta:
        model = Store
        fields = ["name", "email", "address", "owner"]

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Store name is required.")
        return value

    def validate_email(self, value):
        return value.strip().lower()

    def validate_address(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Address is required.")
        return value

    def validate_owner(self, value):
        """The owner, if given, must have role `store_owner`."""
        if value is not None and value.role != Profile.Role.STORE_OWNER:
            raise serializers.ValidationError("Owner must be a profile with role 'store_owner'.")
        return value


class RatedStoreSerializer(serializers.Serializer):
    """Read serializer for a RatedStore (store fields plus aggregates)."""

    id = serializers.IntegerField(source="store.id")
    name = serializers.CharField(source="store.name")
    email = serializers.EmailField(source="store.email")
    address = serializers.CharField(source="store.address")
    owner_id = serializers.IntegerField(source="store.owner_id", allow_null=True)
    owner_name = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField(source="store.created_at")
    average_rating = serializers.FloatField()
    total_ratings = serializers.IntegerField()

    def get_owner_name(self, obj):
        owner = obj.store.owner
        return owner.name if owner else ""
