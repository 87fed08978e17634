"""Password policy used by registration, admin user creation and password changes."""

import re

from django.core.exceptions import ValidationError
from django.utils.translation import gettext as _

SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'


class PasswordPolicyValidator:
    """Require 8-16 characters, one uppercase letter and one special character."""

    def __init__(self, min_length=8, max_length=16):
        self.min_length = min_length
        self.max_length = max_length

    def validate(self, password, user=None):
        if not self.min_length <= len(password) <= self.max_length:
            raise ValidationError(
                _("Password must be %(min)d-%(max)d characters long."),
                code="password_length",
                params={"min": self.min_length, "max": self.max_length},
            )
        if not re.search(r"[A-Z]", password):
            raise ValidationError(
                _("Password must contain at least one uppercase letter."),
                code="password_no_upper",
            )
        if not any(c in SPECIAL_CHARACTERS for c in password):
            raise ValidationError(
                _("Password must contain at least one special character."),
                code="password_no_special",
            )

    def get_help_text(self):
        return _(
            "Your password must be %(min)d-%(max)d characters long and contain an "
            "uppercase letter and a special character."
        ) % {"min": self.min_length, "max": self.max_length}
