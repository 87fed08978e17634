"""Auth API serializers.

Provides serializers for registration, login, password changes and
admin-side identity creation. These checks are advisory form validation;
the session context and registration service enforce the rules again.
"""

from django.contrib.auth.password_validation import validate_password
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from profiles.api.serializers import validate_profile_address, validate_profile_name
from profiles.models import Profile


def _check_password(value):
    validate_password(value)
    return value


class RegistrationSerializer(serializers.Serializer):
    """Validate public sign-up input. There is no role field; any supplied role is ignored."""

    name = serializers.CharField()
    email = serializers.EmailField()
    address = serializers.CharField()
    password = serializers.CharField(write_only=True)

    def validate_name(self, value):
        return validate_profile_name(value)

    def validate_address(self, value):
        return validate_profile_address(value)

    def validate_email(self, value):
        return value.strip().lower()

    def validate_password(self, value):
        return _check_password(value)


class AdminUserCreateSerializer(RegistrationSerializer):
    """Registration input plus the role to assign (admin-only endpoint)."""

    role = serializers.ChoiceField(choices=Profile.Role.choices, default=Profile.Role.USER)


class LoginSerializer(serializers.Serializer):
    """Email and password for password sign-in."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class PasswordChangeSerializer(serializers.Serializer):
    """New password, optionally confirmed.

    The current password is not verified; an authenticated session suffices.
    """

    new_password = serializers.CharField(write_only=True)
    repeated_password = serializers.CharField(write_only=True, required=False)

    def validate(self, attrs):
        repeated = attrs.get("repeated_password")
        if repeated is not None and repeated != attrs["new_password"]:
            raise serializers.ValidationError(
                {"repeated_password": _("Passwords do not match.")}
            )
        return attrs
