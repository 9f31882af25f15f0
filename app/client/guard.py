from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from app.client.state import AuthState
from app.constants.roles import Capability, capabilities_for


class Decision(str, Enum):
    allow = "allow"
    login = "login"
    forbidden = "forbidden"


@dataclass(frozen=True)
class Route:
    prefix: str
    capability: Optional[Capability] = None  # None: public
    authenticated: bool = False


DEFAULT_ROUTES: List[Route] = [
    Route("/admin", Capability.admin_access),
    Route("/rider", Capability.deliveries_manage),
    Route("/checkout", Capability.shop),
    Route("/orders", Capability.orders_view_own),
    Route("/profile", authenticated=True),
    Route("/cart"),
    Route("/products"),
    Route("/login"),
    Route("/"),
]


class NavigationGuard:
    """
    Decides once per navigation whether a path may be rendered.

    Routes are matched by the longest path prefix.
    """

    def __init__(self, routes: List[Route] = None):
        self.routes = sorted(routes or DEFAULT_ROUTES, key=lambda r: len(r.prefix), reverse=True)

    def match(self, path: str) -> Optional[Route]:
        for route in self.routes:
            if route.prefix == "/":
                if path == "/":
                    return route
                continue
            if path == route.prefix or path.startswith(route.prefix.rstrip("/") + "/"):
                return route
        return None

    def check(self, path: str, auth: AuthState) -> Decision:
        route = self.match(path)
        if route is None:
            # unknown paths render the not-found page
            return Decision.allow

        needs_login = route.authenticated or route.capability is not None
        if not needs_login:
            return Decision.allow

        if not auth.is_authenticated:
            return Decision.login

        if route.capability and route.capability not in capabilities_for(auth.role):
            return Decision.forbidden

        return Decision.allow

    def home_for(self, auth: AuthState) -> str:
        """Landing path after sign-in."""
        landing: Dict[str, str] = {"admin": "/admin", "rider": "/rider"}
        return landing.get(auth.role, "/") if auth.is_authenticated else "/login"
