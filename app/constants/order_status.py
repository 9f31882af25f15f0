from enum import Enum


class OrderStatus(str, Enum):
    pending = "pending"
    paid = "paid"
    shipped = "shipped"
    delivered = "delivered"
    undelivered = "undelivered"
    cancelled = "cancelled"


ALLOWED_TRANSITIONS = {
    "pending": ["paid", "cancelled"],
    "paid": ["shipped", "cancelled"],
    "shipped": ["delivered", "undelivered"],
    "delivered": [],
    "undelivered": [],
    "cancelled": [],
}

# status -> order column stamped the first time the status is reached
TIMESTAMP_FIELDS = {
    "paid": "paid_at",
    "shipped": "shipped_at",
    "delivered": "delivered_at",
    "cancelled": "cancelled_at",
}

TERMINAL_STATUSES = {s for s, targets in ALLOWED_TRANSITIONS.items() if not targets}

CANCELLABLE_STATUSES = {"pending", "paid"}

# statuses a rider may report for a shipped order
DELIVERY_OUTCOMES = {"delivered", "undelivered"}

# statuses that count as revenue on the dashboard
REVENUE_STATUSES = ["paid", "shipped", "delivered"]


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, [])
