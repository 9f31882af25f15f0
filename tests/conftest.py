import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-client-id.apps.googleusercontent.com")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("ENV", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app import models  # noqa: F401  registers tables
from app.database import get_session
from app.main import app as fastapi_app
from app.models.approved_email import ApprovedEmail
from app.models.order import Order
from app.models.product import Product, ProductVariant
from app.models.user import User
from app.schemas.order_schemas import OrderCreate
from app.services.order_placement import place_order
from app.utils.token import create_user_token

SHIPPING = {
    "street": "12 MG Road",
    "city": "Bengaluru",
    "state": "KA",
    "zipCode": "560001",
    "country": "India",
}
CONTACT = {"phone": "+91 98450 00000", "email": "buyer@example.com"}


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def get_session_override():
        with Session(engine) as session:
            yield session

    fastapi_app.dependency_overrides[get_session] = get_session_override
    with TestClient(fastapi_app) as test_client:
        yield test_client
    fastapi_app.dependency_overrides.clear()


# -------- FACTORIES --------

@pytest.fixture
def make_user(session):
    counter = {"n": 0}

    def _make_user(role: str = "customer", is_active: bool = True, name: str | None = None) -> User:
        counter["n"] += 1
        user = User(
            name=name or f"{role.title()} {counter['n']}",
            email=f"{role}{counter['n']}@example.com",
            role=role,
            is_approved=True,
            is_active=is_active,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def customer(make_user):
    return make_user("customer")


@pytest.fixture
def admin(make_user):
    return make_user("admin")


@pytest.fixture
def rider(make_user):
    return make_user("rider")


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_user_token(user)}"}

    return _auth_headers


@pytest.fixture
def make_product(session):
    def _make_product(price: float = 40.0, stock: int = 10, name: str = "Breeze Ceiling Fan",
                      category: str = "fan") -> Product:
        product = Product(
            name=name,
            description="Quiet 3-blade fan",
            category=category,
            brand="Zephyr",
            images=["https://images.example.com/fan.jpg"],
            variants=[
                ProductVariant(
                    color_name="White",
                    color_code="#FFFFFF",
                    size="1200mm",
                    price=price,
                    stock=stock,
                    sku=f"SKU-{name[:3].upper()}-{price}",
                )
            ],
        )
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    return _make_product


@pytest.fixture
def make_order(session, make_product):
    def _make_order(user: User, status: str = "pending", quantity: int = 2, price: float = 40.0) -> Order:
        product = make_product(price=price)
        payload = OrderCreate(
            orderItems=[{"product": product.id, "variant": product.variants[0].id, "quantity": quantity}],
            shippingAddress=SHIPPING,
            contactInfo=CONTACT,
        )
        order = place_order(session, user, payload)

        if status != "pending":
            # jump straight to the requested state for test setup
            order.status = status
            session.add(order)
            session.commit()
            session.refresh(order)
        return order

    return _make_order


@pytest.fixture
def approve(session):
    def _approve(email: str, role: str) -> ApprovedEmail:
        approved = ApprovedEmail(email=email, role=role)
        session.add(approved)
        session.commit()
        session.refresh(approved)
        return approved

    return _approve
