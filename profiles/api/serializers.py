"""Profiles API serializers.

Contains serializers for:
- reading a profile (identity email joined in),
- partially updating the caller's own profile (name and address only),
- changing a profile's role (admin only).

The name/address validators are shared with the registration serializers.
"""

from rest_framework import serializers
from ..models import Profile

NAME_MIN_LENGTH = 20
NAME_MAX_LENGTH = 60
ADDRESS_MAX_LENGTH = 400


# ------------------------------ helpers ------------------------------

def validate_profile_name(value: str) -> str:
    value = (value or "").strip()
    if len(value) < NAME_MIN_LENGTH:
        raise serializers.ValidationError(f"Name must be at least {NAME_MIN_LENGTH} characters.")
    if len(value) > NAME_MAX_LENGTH:
        raise serializers.ValidationError(f"Name must be maximum {NAME_MAX_LENGTH} characters.")
    return value


def validate_profile_address(value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise serializers.ValidationError("Address is required.")
    if len(value) > ADDRESS_MAX_LENGTH:
        raise serializers.ValidationError(f"Address must be maximum {ADDRESS_MAX_LENGTH} characters.")
    return value


# ------------------------------ serializers ------------------------------

class ProfileSerializer(serializers.ModelSerializer):
    """Read-only profile representation."""

    id = serializers.IntegerField(source="pk", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)

    class Meta:
        model = Profile
        fields = ["id", "name", "email", "address", "role", "updated_at"]
        read_only_fields = fields


class ProfilePatchSerializer(serializers.ModelSerializer):
    """
    Partial update of the caller's own profile.
    The role is not writable here; role changes go through the admin endpoint.
    """

    class Meta:
        model = Profile
        fields = ["name", "address"]

    def validate_name(self, value):
        return validate_profile_name(value)

    def validate_address(self, value):
        return validate_profile_address(value)


class ProfileRoleSerializer(serializers.ModelSerializer):
    """Admin-only role change."""

    role = serializers.ChoiceField(choices=Profile.Role.choices)

    class Meta:
        model = Profile
        fields = ["role"]
