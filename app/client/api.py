import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import httpx

from app.client.errors import AuthorizationFailed, RequestFailed, ValidationFailed
from app.client.state import ClientState
from app.constants.order_status import CANCELLABLE_STATUSES, OrderStatus, can_transition
from app.exceptions import InvalidState, InvalidTransition

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


@dataclass
class Page:
    items: List[dict]
    page: int
    pages: int
    total: int


class StorefrontClient:
    """
    Thin wrapper over the storefront REST API.

    Every call either returns the unwrapped ``data`` or raises one of the
    client errors. Nothing is retried; callers re-fetch after a mutation.
    """

    def __init__(
        self,
        state: ClientState,
        base_url: str = DEFAULT_BASE_URL,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self.state = state
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self):
        self.http.close()

    # -------- TRANSPORT --------

    def _headers(self) -> dict:
        if self.state.auth.token:
            return {"Authorization": f"Bearer {self.state.auth.token}"}
        return {}

    def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            response = self.http.request(method, path, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise RequestFailed(f"Network error: {e}")

        try:
            body = response.json()
        except ValueError:
            body = {"success": False, "message": response.text or response.reason_phrase}

        if response.is_success:
            return body

        message = body.get("message") or f"Request failed with status {response.status_code}"
        errors = body.get("errors")

        if response.status_code == 401:
            # token is no longer usable; the UI sends the user to login
            self.state.auth.token = None
            raise AuthorizationFailed(message, response.status_code)
        if response.status_code == 403:
            raise AuthorizationFailed(message, response.status_code)
        if response.status_code in (400, 422) and errors:
            raise ValidationFailed(message, response.status_code, errors)

        raise RequestFailed(message, response.status_code, errors)

    def _data(self, method: str, path: str, **kwargs) -> Any:
        return self._request(method, path, **kwargs).get("data")

    def _page(self, path: str, params: dict) -> Page:
        params = {k: v for k, v in params.items() if v is not None}
        body = self._request("GET", path, params=params)
        meta = body.get("meta") or {}
        return Page(
            items=body.get("data") or [],
            page=meta.get("page", 1),
            pages=meta.get("pages", 0),
            total=meta.get("total", 0),
        )

    # -------- AUTH --------

    def login_with_google(self, id_token: str) -> dict:
        data = self._data("POST", "/auth/google", json={"token": id_token})
        self.state.sign_in(data["token"], data["user"])
        return data["user"]

    def me(self) -> dict:
        user = self._data("GET", "/auth/me")
        self.state.auth.user = user
        return user

    def check_approval(self, email: str) -> dict:
        return self._data("POST", "/auth/check-approval", json={"email": email})

    def logout(self):
        self.state.sign_out()

    # -------- CATALOG --------

    def list_products(self, page: int = 1, limit: int = None, category: str = None,
                      min_price: float = None, max_price: float = None, q: str = None) -> Page:
        return self._page("/products", {
            "page": page, "limit": limit, "category": category,
            "minPrice": min_price, "maxPrice": max_price, "q": q,
        })

    def get_product(self, product_id: int) -> dict:
        return self._data("GET", f"/products/{product_id}")

    def create_product(self, payload: dict) -> dict:
        return self._data("POST", "/products", json=payload)

    def update_product(self, product_id: int, payload: dict) -> dict:
        return self._data("PATCH", f"/products/{product_id}", json=payload)

    def delete_product(self, product_id: int):
        self._request("DELETE", f"/products/{product_id}")

    # -------- CUSTOMER ORDERS --------

    def checkout(self, shipping_address: dict, contact_info: dict, payment_method: str = "Credit Card") -> dict:
        """Place an order from the cart; the cart is emptied only on success."""
        if not self.state.cart.items:
            raise ValidationFailed("Your cart is empty", errors=[{"field": "orderItems", "message": "No order items"}])

        order = self._data("POST", "/orders", json={
            "orderItems": self.state.cart.to_order_items(),
            "shippingAddress": shipping_address,
            "contactInfo": contact_info,
            "paymentMethod": payment_method,
        })
        self.state.cart.clear()
        return order

    def my_orders(self, page: int = 1, limit: int = None) -> Page:
        return self._page("/orders", {"page": page, "limit": limit})

    def get_order(self, order_id: int) -> dict:
        return self._data("GET", f"/orders/{order_id}")

    def cancel_order(self, order: dict) -> dict:
        if order["status"] not in CANCELLABLE_STATUSES:
            raise InvalidState(f"Order cannot be cancelled in status: {order['status']}")
        return self._data("PATCH", f"/orders/{order['id']}/cancel")

    # -------- ADMIN --------

    def dashboard(self) -> dict:
        return self._data("GET", "/admin/dashboard")

    def admin_orders(self, page: int = 1, limit: int = None, status: str = None) -> Page:
        return self._page("/admin/orders", {"page": page, "limit": limit, "status": status})

    def admin_order(self, order_id: int) -> dict:
        return self._data("GET", f"/admin/orders/{order_id}")

    def update_order_status(self, order: dict, new_status: OrderStatus | str) -> dict:
        new_status = OrderStatus(new_status).value
        if not can_transition(order["status"], new_status):
            raise InvalidTransition(order["status"], new_status)
        return self._data("PATCH", f"/admin/orders/{order['id']}/status", json={"status": new_status})

    def assign_rider(self, order: dict, rider_id: int) -> dict:
        if order["status"] != OrderStatus.paid.value:
            raise InvalidState(f"Cannot assign rider to order in status: {order['status']}")
        return self._data("PATCH", f"/admin/orders/{order['id']}/assign", json={"riderId": rider_id})

    def approved_emails(self, page: int = 1, limit: int = None, role: str = None) -> Page:
        return self._page("/admin/approved-emails", {"page": page, "limit": limit, "role": role})

    def approve_email(self, email: str, role: str) -> dict:
        return self._data("POST", "/admin/approved-emails", json={"email": email, "role": role})

    def remove_approved_email(self, approved_id: int):
        self._request("DELETE", f"/admin/approved-emails/{approved_id}")

    def riders(self) -> List[dict]:
        return self._data("GET", "/admin/riders")

    def set_rider_active(self, rider_id: int, is_active: bool) -> dict:
        return self._data("PATCH", f"/admin/riders/{rider_id}/status", json={"isActive": is_active})

    # -------- RIDER --------

    def assigned_orders(self, page: int = 1, limit: int = None, status: str = None) -> Page:
        return self._page("/rider/orders", {"page": page, "limit": limit, "status": status})

    def report_delivery(self, order: dict, outcome: OrderStatus | str) -> dict:
        outcome = OrderStatus(outcome).value
        if not can_transition(order["status"], outcome) or order["status"] != OrderStatus.shipped.value:
            raise InvalidTransition(order["status"], outcome)
        return self._data("PATCH", f"/rider/orders/{order['id']}/status", json={"status": outcome})

    def rider_dashboard(self) -> dict:
        return self._data("GET", "/rider/dashboard")

    # -------- PROFILE --------

    def update_profile(self, **fields) -> dict:
        user = self._data("PATCH", "/users/profile", json=fields)
        self.state.auth.user = user
        return user
