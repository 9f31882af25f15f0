import pytest

from app.client.guard import Decision, NavigationGuard, Route
from app.client.state import AuthState
from app.constants.roles import Capability

ANONYMOUS = AuthState()
CUSTOMER = AuthState(token="t", user={"id": 1, "role": "customer"})
RIDER = AuthState(token="t", user={"id": 2, "role": "rider"})
ADMIN = AuthState(token="t", user={"id": 3, "role": "admin"})


@pytest.fixture
def guard():
    return NavigationGuard()


@pytest.mark.parametrize(
    "path, auth, expected",
    [
        ("/", ANONYMOUS, Decision.allow),
        ("/products/7", ANONYMOUS, Decision.allow),
        ("/cart", ANONYMOUS, Decision.allow),
        ("/checkout", ANONYMOUS, Decision.login),
        ("/checkout", CUSTOMER, Decision.allow),
        ("/checkout", RIDER, Decision.forbidden),
        ("/orders/5", CUSTOMER, Decision.allow),
        ("/admin", CUSTOMER, Decision.forbidden),
        ("/admin/orders/5", ADMIN, Decision.allow),
        ("/rider/orders", RIDER, Decision.allow),
        ("/rider/orders", ADMIN, Decision.forbidden),
        ("/profile", RIDER, Decision.allow),
        ("/profile", ANONYMOUS, Decision.login),
    ],
)
def test_check(guard, path, auth, expected):
    assert guard.check(path, auth) == expected


def test_prefix_must_match_whole_segment(guard):
    assert guard.match("/administrator") is None
    assert guard.match("/admin/riders").prefix == "/admin"


def test_unknown_paths_are_allowed(guard):
    assert guard.check("/no-such-page", ANONYMOUS) == Decision.allow


def test_token_without_user_is_not_signed_in(guard):
    assert guard.check("/orders", AuthState(token="t")) == Decision.login


def test_longest_prefix_wins():
    guard = NavigationGuard([
        Route("/admin", Capability.admin_access),
        Route("/admin/help"),
    ])

    assert guard.check("/admin/help", CUSTOMER) == Decision.allow
    assert guard.check("/admin/orders", CUSTOMER) == Decision.forbidden


@pytest.mark.parametrize(
    "auth, landing",
    [(ANONYMOUS, "/login"), (CUSTOMER, "/"), (RIDER, "/rider"), (ADMIN, "/admin")],
)
def test_home_for(guard, auth, landing):
    assert guard.home_for(auth) == landing
