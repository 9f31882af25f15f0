import pytest

from app.services.order_status import OrderStatusController


@pytest.fixture
def shipped_order(session, customer, rider, make_order):
    order = make_order(customer, status="paid")
    return OrderStatusController(session).assign_rider(order.id, rider.id)


def test_rider_routes_reject_customers(client, customer, auth_headers):
    response = client.get("/rider/orders", headers=auth_headers(customer))

    assert response.status_code == 403


def test_assigned_orders(client, rider, make_user, auth_headers, shipped_order, make_order, customer):
    make_order(customer, status="paid")

    response = client.get("/rider/orders", headers=auth_headers(rider))

    assert response.status_code == 200
    body = response.json()
    assert [o["id"] for o in body["data"]] == [shipped_order.id]
    assert body["meta"]["total"] == 1

    other = make_user("rider")
    assert client.get("/rider/orders", headers=auth_headers(other)).json()["data"] == []


def test_assigned_order_detail(client, rider, make_user, auth_headers, shipped_order):
    ok = client.get(f"/rider/orders/{shipped_order.id}", headers=auth_headers(rider))
    assert ok.status_code == 200
    assert ok.json()["data"]["contactInfo"]["phone"]

    hidden = client.get(f"/rider/orders/{shipped_order.id}", headers=auth_headers(make_user("rider")))
    assert hidden.status_code == 404


@pytest.mark.parametrize("outcome", ["delivered", "undelivered"])
def test_report_outcome(client, rider, auth_headers, shipped_order, outcome):
    response = client.patch(
        f"/rider/orders/{shipped_order.id}/status", json={"status": outcome}, headers=auth_headers(rider)
    )

    assert response.status_code == 200
    assert response.json()["data"]["status"] == outcome


def test_report_invalid_outcome(client, rider, auth_headers, shipped_order):
    response = client.patch(
        f"/rider/orders/{shipped_order.id}/status", json={"status": "cancelled"}, headers=auth_headers(rider)
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Riders can only mark orders as Delivered or Undelivered"


def test_report_twice(client, rider, auth_headers, shipped_order):
    url = f"/rider/orders/{shipped_order.id}/status"
    client.patch(url, json={"status": "delivered"}, headers=auth_headers(rider))

    again = client.patch(url, json={"status": "undelivered"}, headers=auth_headers(rider))

    assert again.status_code == 400
    assert again.json()["message"] == "Cannot update order in status: delivered"


def test_rider_dashboard(client, session, customer, rider, auth_headers, shipped_order, make_order):
    second = make_order(customer, status="paid")
    controller = OrderStatusController(session)
    controller.assign_rider(second.id, rider.id)
    controller.record_delivery_outcome(second.id, "delivered", rider)

    response = client.get("/rider/dashboard", headers=auth_headers(rider))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["counts"]["totalAssigned"] == 2
    assert data["counts"]["shippedOrders"] == 1
    assert data["counts"]["deliveredOrders"] == 1
    assert data["counts"]["todayOrders"] == 2
    assert data["performance"]["deliveryRate"] == "50.00"
    assert len(data["recentOrders"]) == 2
