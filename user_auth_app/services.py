"""Identity registration.

Creating an identity and materialising its profile happen in one
transaction, so a committed identity always has a profile. The role is an
explicit argument chosen by the caller on the server side; public sign-up
always passes `user`.
"""

import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction

from common.exceptions import AuthError
from profiles.models import Profile

logger = logging.getLogger(__name__)

User = get_user_model()


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def register_identity(*, name: str, email: str, address: str, password: str, role: str = Profile.Role.USER):
    """Create the identity (email doubles as username) and its profile.

    Raises AuthError if the email is already registered, the role is unknown
    or the profile data is invalid (name 20-60 characters, address required,
    at most 400 characters). Nothing is written in that case.
    """
    if role not in Profile.Role.values:
        raise AuthError(f"Invalid role: {role}")

    email = normalize_email(email)
    if User.objects.filter(email__iexact=email).exists() or User.objects.filter(username__iexact=email).exists():
        raise AuthError("User already registered")

    try:
        with transaction.atomic():
            user = User.objects.create_user(username=email, email=email, password=password)
            profile = Profile(user=user, name=(name or "").strip(), address=(address or "").strip(), role=role)
            profile.full_clean()
            profile.save()
    except DjangoValidationError as exc:
        raise AuthError(" ".join(exc.messages))
    except IntegrityError:
        raise AuthError("User already registered")

    logger.info("Registered identity %s with role %s", user.pk, role)
    return user
