# app/services/order_event_service.py

from typing import List, Optional
from sqlmodel import Session, select
from app.models.order_event import OrderEvent


STATUS_LABELS = {
    "pending": "Order placed",
    "paid": "Payment received",
    "shipped": "Out for delivery",
    "delivered": "Delivered",
    "undelivered": "Delivery failed",
    "cancelled": "Order cancelled",
}


def log_order_event(
    session: Session,
    order_id: int,
    event_type: str,
    label: str,
    created_by: str = "system",
    from_status: Optional[str] = None,
    to_status: Optional[str] = None,
    meta: Optional[dict] = None,
) -> OrderEvent:
    """
    Add a timeline entry to the session. The caller commits it together
    with the order change it describes.
    """
    event = OrderEvent(
        order_id=order_id,
        event_type=event_type,
        label=label,
        from_status=from_status,
        to_status=to_status,
        meta=meta,
        created_by=created_by,
    )

    session.add(event)
    return event


def log_status_change(session: Session, order_id: int, current: str, target: str, created_by: str) -> OrderEvent:
    return log_order_event(
        session,
        order_id=order_id,
        event_type=f"status_{target}",
        label=STATUS_LABELS[target],
        created_by=created_by,
        from_status=current,
        to_status=target,
    )


def list_order_events(session: Session, order_id: int) -> List[OrderEvent]:
    return session.exec(
        select(OrderEvent)
        .where(OrderEvent.order_id == order_id)
        .order_by(OrderEvent.created_at, OrderEvent.id)
    ).all()


def actor_label(user) -> str:
    if user is None:
        return "system"
    return f"{user.role}:{user.id}"
