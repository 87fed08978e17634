"""Session and identity context.

`SessionContext` tracks who is signed in for the lifetime of one request and
with which role. It is owned by the view that creates it (usually as a
context manager) and is never shared between requests.

The context listens to Django's `user_logged_in` / `user_logged_out` signals,
filtered to its own request, and re-resolves the identity on every event.
Resolution is the only place profile data enters the session:

1. identity with profile  -> identity and profile are kept;
2. identity without profile -> forced sign-out, state cleared;
3. no identity            -> state cleared.

Auth operations never raise across this boundary. They return an
`AuthResult` carrying either success or a readable error message.
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from django.contrib.auth import authenticate, login, logout, update_session_auth_hash
from django.contrib.auth.models import AnonymousUser
from django.contrib.auth.password_validation import validate_password
from django.contrib.auth.signals import user_logged_in, user_logged_out
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.authtoken.models import Token

from common.exceptions import AuthError, ConsistencyError, NotFound
from profiles.models import Profile
from profiles.services import fetch_profile
from .services import normalize_email, register_identity

logger = logging.getLogger(__name__)

LOADING = "loading"
ANONYMOUS = "anonymous"

INVALID_CREDENTIALS = "Invalid login credentials"
INCOMPLETE_ACCOUNT = "Account setup is incomplete. Please contact an administrator."
NOT_SIGNED_IN = "Not signed in."
ADMIN_ONLY = "Only admins can create users with a role."


@dataclass(frozen=True)
class AuthResult:
    """Outcome of an auth operation."""

    success: bool
    error: Optional[str] = None
    token: Optional[str] = None
    user_id: Optional[int] = None

    @classmethod
    def ok(cls, token=None, user_id=None) -> "AuthResult":
        return cls(success=True, token=token, user_id=user_id)

    @classmethod
    def fail(cls, message: str) -> "AuthResult":
        return cls(success=False, error=message)

    def as_dict(self) -> dict:
        data = {"success": self.success}
        if self.error:
            data["error"] = self.error
        return data


class Subscription:
    """Handle returned by `SessionContext.subscribe`."""

    def __init__(self, listeners: list, callback: Callable):
        self._listeners = listeners
        self._callback = callback

    @property
    def active(self) -> bool:
        return self._callback in self._listeners

    def unsubscribe(self) -> None:
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)


def _raw(request):
    """The underlying HttpRequest of a DRF Request (or the request itself)."""
    return getattr(request, "_request", request)


class SessionContext:
    """Request-scoped view of the signed-in identity and its profile."""

    _ids = itertools.count()

    def __init__(self, request):
        self.request = request
        self.identity = None
        self.profile: Optional[Profile] = None
        self.resolved = False
        self._listeners: list = []
        self._uid = f"session-context-{next(self._ids)}"
        self._connected = False

    # ------------------------------ lifecycle ------------------------------

    def start(self) -> "SessionContext":
        """Subscribe to auth events and resolve the current identity.

        If resolution fails the receivers are disconnected again before the
        error propagates.
        """
        if not self._connected:
            user_logged_in.connect(self._on_logged_in, weak=False, dispatch_uid=f"{self._uid}-in")
            user_logged_out.connect(self._on_logged_out, weak=False, dispatch_uid=f"{self._uid}-out")
            self._connected = True
        try:
            self._resolve(getattr(self.request, "user", None))
        except Exception:
            self.close()
            raise
        return self

    def close(self) -> None:
        """Tear down the signal receivers and drop all listeners."""
        if self._connected:
            user_logged_in.disconnect(dispatch_uid=f"{self._uid}-in")
            user_logged_out.disconnect(dispatch_uid=f"{self._uid}-out")
            self._connected = False
        self._listeners.clear()

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    # -------------------------------- state --------------------------------

    @property
    def state(self) -> str:
        """`loading`, `anonymous` or the profile's role."""
        if not self.resolved:
            return LOADING
        if self.profile is None:
            return ANONYMOUS
        return self.profile.role

    @property
    def is_signed_in(self) -> bool:
        return self.profile is not None

    def subscribe(self, callback: Callable[["SessionContext"], None]) -> Subscription:
        """Call `callback(context)` after every state change until unsubscribed."""
        self._listeners.append(callback)
        return Subscription(self._listeners, callback)

    def _snapshot(self):
        return (
            self.resolved,
            getattr(self.identity, "pk", None),
            getattr(self.profile, "pk", None),
            getattr(self.profile, "role", None),
        )

    def _set_state(self, identity, profile) -> None:
        before = self._snapshot()
        self.identity = identity
        self.profile = profile
        self.resolved = True
        if self._snapshot() != before:
            for callback in list(self._listeners):
                callback(self)

    # ---------------------------- auth events ----------------------------

    def _owns(self, request) -> bool:
        return request is not None and _raw(request) is _raw(self.request)

    def _on_logged_in(self, sender, request=None, user=None, **kwargs):
        if self._owns(request):
            self._resolve(user)

    def _on_logged_out(self, sender, request=None, user=None, **kwargs):
        if self._owns(request):
            self._set_state(None, None)

    def _resolve(self, user) -> None:
        if user is None or not user.is_authenticated:
            self._set_state(None, None)
            return
        try:
            profile = self._load_profile(user)
        except ConsistencyError:
            logger.warning("Identity %s has no profile; forcing sign-out", user.pk)
            self._end_session(user)
            return
        self._set_state(user, profile)

    def _load_profile(self, user) -> Profile:
        try:
            return fetch_profile(user.pk)
        except NotFound:
            raise ConsistencyError(f"Identity {user.pk} has no profile.")

    def _end_session(self, user) -> None:
        """Revoke the API token, flush the session and clear the state."""
        if user is not None and user.is_authenticated:
            Token.objects.filter(user=user).delete()
        if hasattr(self.request, "session"):
            logout(self.request)
        else:
            self.request.user = AnonymousUser()
        self._set_state(None, None)

    # ----------------------------- operations -----------------------------

    def sign_in(self, email: str, password: str) -> AuthResult:
        user = authenticate(self.request, username=normalize_email(email), password=password)
        if user is None:
            logger.info("Failed sign-in for %s", normalize_email(email))
            return AuthResult.fail(INVALID_CREDENTIALS)

        login(self.request, user)
        if not self.is_signed_in:
            return AuthResult.fail(INCOMPLETE_ACCOUNT)

        token, _ = Token.objects.get_or_create(user=user)
        return AuthResult.ok(token=token.key, user_id=user.pk)

    def sign_up(self, name: str, email: str, address: str, password: str) -> AuthResult:
        """Public registration; the role is always `user`."""
        return self._register(name, email, address, password, Profile.Role.USER)

    def sign_out(self) -> AuthResult:
        """Clear the session unconditionally."""
        self._end_session(self.identity or getattr(self.request, "user", None))
        return AuthResult.ok()

    def change_password(self, new_password: str) -> AuthResult:
        if self.identity is None:
            return AuthResult.fail(NOT_SIGNED_IN)
        try:
            validate_password(new_password, user=self.identity)
        except DjangoValidationError as exc:
            return AuthResult.fail(" ".join(exc.messages))

        self.identity.set_password(new_password)
        self.identity.save(update_fields=["password"])
        if hasattr(self.request, "session"):
            update_session_auth_hash(self.request, self.identity)
        return AuthResult.ok(user_id=self.identity.pk)

    def create_identity_with_role(self, name: str, email: str, address: str, password: str, role: str) -> AuthResult:
        """Admin-only: register another identity with an arbitrary role.

        The caller's own session is left untouched.
        """
        if self.state != Profile.Role.ADMIN:
            return AuthResult.fail(ADMIN_ONLY)
        return self._register(name, email, address, password, role)

    def _register(self, name, email, address, password, role) -> AuthResult:
        try:
            validate_password(password)
            user = register_identity(name=name, email=email, address=address, password=password, role=role)
        except DjangoValidationError as exc:
            return AuthResult.fail(" ".join(exc.messages))
        except AuthError as exc:
            return AuthResult.fail(exc.message)
        return AuthResult.ok(user_id=user.pk)
