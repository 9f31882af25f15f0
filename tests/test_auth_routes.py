import pytest
from sqlmodel import select

from app.models.user import User
from app.routes import auth as auth_routes
from app.schemas.auth_schemas import GoogleUserInfo
from app.utils.token import create_access_token


@pytest.fixture
def google_user(monkeypatch):
    """Stand-in for a verified Google ID token."""
    info = GoogleUserInfo(
        google_id="google-123",
        email="shopper@example.com",
        name="Asha Shopper",
        picture="https://lh3.googleusercontent.com/a/photo",
    )

    def fake_verify(token):
        return info if token == "valid-google-token" else None

    monkeypatch.setattr(auth_routes, "verify_google_token", fake_verify)
    return info


def test_login_creates_user(client, session, approve, google_user):
    approve("shopper@example.com", "customer")

    response = client.post("/auth/google", json={"token": "valid-google-token"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token"]
    assert data["user"]["email"] == "shopper@example.com"
    assert data["user"]["role"] == "customer"

    user = session.exec(select(User).where(User.email == "shopper@example.com")).one()
    assert user.google_id == "google-123"
    assert user.is_approved is True


def test_login_uses_approved_role(client, approve, google_user):
    approve("shopper@example.com", "rider")

    response = client.post("/auth/google", json={"token": "valid-google-token"})

    assert response.json()["data"]["user"]["role"] == "rider"


def test_login_rejects_deactivated_approval(client, session, approve, google_user):
    approved = approve("shopper@example.com", "customer")
    approved.is_active = False
    session.add(approved)
    session.commit()

    response = client.post("/auth/google", json={"token": "valid-google-token"})

    assert response.status_code == 403


def test_login_links_existing_account(client, session, approve, google_user):
    existing = User(name="Asha", email="shopper@example.com", role="customer")
    session.add(existing)
    session.commit()
    approve("shopper@example.com", "admin")

    response = client.post("/auth/google", json={"token": "valid-google-token"})

    assert response.json()["data"]["user"]["id"] == existing.id
    assert response.json()["data"]["user"]["role"] == "admin"


def test_login_rejects_unapproved_email(client, google_user):
    response = client.post("/auth/google", json={"token": "valid-google-token"})

    assert response.status_code == 403
    assert response.json()["message"] == "Email not approved for login"


def test_login_rejects_bad_token(client, google_user):
    response = client.post("/auth/google", json={"token": "forged"})

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_me(client, customer, auth_headers):
    response = client.get("/auth/me", headers=auth_headers(customer))

    assert response.status_code == 200
    assert response.json()["data"]["id"] == customer.id


def test_me_with_garbage_token(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_me_for_deleted_user(client):
    token = create_access_token({"sub": "4242", "role": "customer"})

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_me_for_unapproved_user(client, session, auth_headers):
    user = User(name="Pending", email="pending@example.com", is_approved=False)
    session.add(user)
    session.commit()
    session.refresh(user)

    response = client.get("/auth/me", headers=auth_headers(user))

    assert response.status_code == 403


def test_check_approval(client, approve):
    approve("rider@example.com", "rider")

    approved = client.post("/auth/check-approval", json={"email": "Rider@Example.com"})
    unknown = client.post("/auth/check-approval", json={"email": "nobody@example.com"})

    assert approved.json()["data"] == {"isApproved": True, "role": "rider"}
    assert unknown.json()["data"] == {"isApproved": False, "role": None}
