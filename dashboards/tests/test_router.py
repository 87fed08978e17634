from types import SimpleNamespace

from django.test import SimpleTestCase

from dashboards.router import ANONYMOUS, LOADING, RoleRouter, RouteDecision, normalize_path
from user_auth_app.session import Subscription

ROLES = ("admin", "store_owner", "user")
DASHBOARDS = {"admin": "/admin", "store_owner": "/store-owner", "user": "/user"}
ALL_PATHS = ("/", "/login", "/register", "/admin", "/store-owner", "/user", "/somewhere/else")


class FakeSession:
    """Minimal stand-in for SessionContext: resolved flag, profile, listeners."""

    def __init__(self):
        self.resolved = False
        self.profile = None
        self._listeners = []

    def subscribe(self, callback):
        self._listeners.append(callback)
        return Subscription(self._listeners, callback)

    def emit(self, role=None):
        self.resolved = True
        self.profile = SimpleNamespace(role=role) if role else None
        for callback in list(self._listeners):
            callback(self)


class NormalizePathTests(SimpleTestCase):
    def test_normalize(self):
        self.assertEqual(normalize_path(""), "/")
        self.assertEqual(normalize_path("/admin/"), "/admin")
        self.assertEqual(normalize_path("admin"), "/admin")
        self.assertEqual(normalize_path("/user?tab=1"), "/user")


class RoleRouterTests(SimpleTestCase):
    def setUp(self):
        self.session = FakeSession()
        self.router = RoleRouter()
        self.router.bind(self.session)

    def test_loading_until_resolved(self):
        for path in ALL_PATHS:
            self.assertEqual(self.router.resolve(path), RouteDecision(view=LOADING))

    def test_anonymous_sees_only_public_views(self):
        self.session.emit(None)
        self.assertEqual(self.router.resolve("/login"), RouteDecision(view="login"))
        self.assertEqual(self.router.resolve("/register"), RouteDecision(view="register"))
        for path in ("/", "/admin", "/store-owner", "/user", "/somewhere/else"):
            self.assertEqual(self.router.resolve(path), RouteDecision(redirect="/login"))

    def test_each_role_reaches_only_its_dashboard(self):
        for role in ROLES:
            self.session.emit(role)
            own = DASHBOARDS[role]
            for path in ALL_PATHS:
                decision = self.router.resolve(path)
                if path == own:
                    self.assertFalse(decision.is_redirect)
                    self.assertEqual(decision.view, f"{role}_dashboard")
                else:
                    self.assertEqual(decision, RouteDecision(redirect=own), (role, path))

    def test_trailing_slash_reaches_dashboard(self):
        self.session.emit("user")
        self.assertEqual(self.router.resolve("/user/"), RouteDecision(view="user_dashboard"))

    def test_unknown_role_is_anonymous(self):
        self.session.emit("superuser")
        self.assertEqual(self.router.state, ANONYMOUS)
        self.assertEqual(self.router.resolve("/admin"), RouteDecision(redirect="/login"))

    def test_never_returns_to_loading(self):
        states = []
        for role in (None, "admin", None, "store_owner", "user", None):
            self.session.emit(role)
            states.append(self.router.state)
            self.session.resolved = False
            self.router.on_session_change(self.session)
            states.append(self.router.state)
        self.assertNotIn(LOADING, states)

    def test_bind_applies_already_resolved_state(self):
        session = FakeSession()
        session.emit("admin")
        router = RoleRouter()
        router.bind(session)
        self.assertEqual(router.state, "admin")

    def test_unbind_stops_following(self):
        self.session.emit("user")
        self.router.unbind()
        self.session.emit("admin")
        self.assertEqual(self.router.state, "user")
