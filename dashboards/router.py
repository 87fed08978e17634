"""Role-based view router.

Maps the session state to the views a client may render. States are
`loading`, `anonymous` and the three roles. The router starts in `loading`
and leaves it on the first session resolution; afterwards it only moves
between `anonymous` and the role states.

- anonymous: only the public views render, everything else redirects to
  the sign-in view;
- role state: only that role's dashboard renders, everything else
  (root, public views, other dashboards) redirects to it.
"""

from dataclasses import dataclass
from typing import Optional

from profiles.models import Profile

LOADING = "loading"
ANONYMOUS = "anonymous"

LOGIN_PATH = "/login"

PUBLIC_VIEWS = {
    LOGIN_PATH: "login",
    "/register": "register",
}

DASHBOARD_PATHS = {
    Profile.Role.ADMIN: "/admin",
    Profile.Role.STORE_OWNER: "/store-owner",
    Profile.Role.USER: "/user",
}

DASHBOARD_VIEWS = {
    Profile.Role.ADMIN: "admin_dashboard",
    Profile.Role.STORE_OWNER: "store_owner_dashboard",
    Profile.Role.USER: "user_dashboard",
}


@dataclass(frozen=True)
class RouteDecision:
    """Either a view to render or a path to redirect to."""

    view: Optional[str] = None
    redirect: Optional[str] = None

    @property
    def is_redirect(self) -> bool:
        return self.redirect is not None


def normalize_path(path: str) -> str:
    path = (path or "/").split("?", 1)[0].strip() or "/"
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def state_for(session) -> str:
    """Router state for a resolved session context."""
    role = session.profile.role if session.profile is not None else None
    return role if role in DASHBOARD_PATHS else ANONYMOUS


class RoleRouter:
    """Long-lived router driven by a SessionContext."""

    def __init__(self):
        self.state = LOADING
        self._subscription = None

    def bind(self, session):
        """Follow `session` from now on; returns the subscription."""
        self._subscription = session.subscribe(self.on_session_change)
        if session.resolved:
            self.on_session_change(session)
        return self._subscription

    def unbind(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def on_session_change(self, session) -> None:
        if session.resolved:
            self.state = state_for(session)

    def resolve(self, path: str) -> RouteDecision:
        path = normalize_path(path)

        if self.state == LOADING:
            return RouteDecision(view=LOADING)

        if self.state == ANONYMOUS:
            if path in PUBLIC_VIEWS:
                return RouteDecision(view=PUBLIC_VIEWS[path])
            return RouteDecision(redirect=LOGIN_PATH)

        dashboard = DASHBOARD_PATHS[self.state]
        if path == dashboard:
            return RouteDecision(view=DASHBOARD_VIEWS[self.state])
        return RouteDecision(redirect=dashboard)
