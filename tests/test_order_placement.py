import pytest
from fastapi import HTTPException
from sqlmodel import select

from app.models.order_event import OrderEvent
from app.models.product import ProductVariant
from app.schemas.order_schemas import OrderCreate
from app.services.order_placement import calculate_prices, place_order
from tests.conftest import CONTACT, SHIPPING


def _payload(*lines):
    return OrderCreate(
        orderItems=[{"product": p, "variant": v, "quantity": q} for p, v, q in lines],
        shippingAddress=SHIPPING,
        contactInfo=CONTACT,
    )


def test_calculate_prices_adds_flat_shipping_under_threshold():
    prices = calculate_prices(80.0)

    assert prices == {
        "items_price": 80.0,
        "tax_price": 4.0,
        "shipping_price": 10.0,
        "total_price": 94.0,
    }


def test_calculate_prices_free_shipping_over_threshold():
    prices = calculate_prices(200.0)

    assert prices["shipping_price"] == 0.0
    assert prices["tax_price"] == 10.0
    assert prices["total_price"] == 210.0


def test_calculate_prices_threshold_is_exclusive():
    assert calculate_prices(100.0)["shipping_price"] == 10.0


def test_place_order_snapshots_items(session, customer, make_product):
    product = make_product(price=60.0, stock=5)
    variant = product.variants[0]

    order = place_order(session, customer, _payload((product.id, variant.id, 2)))

    assert order.status == "pending"
    assert order.user_id == customer.id
    assert order.items_price == 120.0
    assert order.shipping_price == 0.0
    assert order.total_price == 126.0
    assert order.paid_at is None

    [item] = order.items
    assert item.name == product.name
    assert item.price == 60.0
    assert item.color_name == "White"
    assert item.image == product.images[0]

    session.expire_all()
    assert session.get(ProductVariant, variant.id).stock == 3


def test_place_order_logs_placement_event(session, customer, make_product):
    product = make_product()
    order = place_order(session, customer, _payload((product.id, product.variants[0].id, 1)))

    events = session.exec(select(OrderEvent).where(OrderEvent.order_id == order.id)).all()
    assert [e.event_type for e in events] == ["order_placed"]
    assert events[0].created_by == f"customer:{customer.id}"


def test_place_order_rejects_empty_cart(session, customer):
    with pytest.raises(HTTPException) as exc:
        place_order(session, customer, _payload())
    assert exc.value.status_code == 400


def test_place_order_unknown_product(session, customer):
    with pytest.raises(HTTPException) as exc:
        place_order(session, customer, _payload((999, 1, 1)))
    assert exc.value.status_code == 404


def test_place_order_variant_of_other_product(session, customer, make_product):
    fan = make_product(name="Fan")
    ac = make_product(name="Split AC", category="air-conditioner", price=500.0)

    with pytest.raises(HTTPException) as exc:
        place_order(session, customer, _payload((fan.id, ac.variants[0].id, 1)))
    assert exc.value.status_code == 404


def test_place_order_insufficient_stock_rolls_back(session, customer, make_product):
    plenty = make_product(name="Tower Fan", stock=10)
    scarce = make_product(name="Table Fan", stock=1)
    plenty_variant_id = plenty.variants[0].id

    with pytest.raises(HTTPException) as exc:
        place_order(session, customer, _payload(
            (plenty.id, plenty_variant_id, 4),
            (scarce.id, scarce.variants[0].id, 2),
        ))

    assert exc.value.status_code == 400
    assert "Insufficient stock" in exc.value.detail

    session.expire_all()
    assert session.get(ProductVariant, plenty_variant_id).stock == 10


def test_place_order_unknown_variant_keeps_earlier_stock(session, customer, make_product):
    fan = make_product(name="Tower Fan", stock=10)
    fan_variant_id = fan.variants[0].id

    with pytest.raises(HTTPException) as exc:
        place_order(session, customer, _payload(
            (fan.id, fan_variant_id, 3),
            (fan.id, 999, 1),
        ))

    assert exc.value.status_code == 404
    assert session.get(ProductVariant, fan_variant_id).stock == 10
