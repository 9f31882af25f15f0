import logging
from datetime import datetime
from typing import List

from sqlmodel import Session, func, select

from app.constants.order_status import OrderStatus
from app.constants.roles import UserRole
from app.exceptions import RiderNotFound
from app.models.order import Order
from app.models.user import User

logger = logging.getLogger(__name__)


def rider_stats(session: Session, rider_id: int) -> dict:
    """Aggregate counters for one rider, computed from assigned orders."""
    rows = session.exec(
        select(Order.status, func.count(Order.id))
        .where(Order.assigned_rider_id == rider_id)
        .group_by(Order.status)
    ).all()
    by_status = {status: count for status, count in rows}

    last_active = session.exec(
        select(func.max(Order.updated_at))
        .where(Order.assigned_rider_id == rider_id)
    ).one()

    return {
        "totalAssigned": sum(by_status.values()),
        "deliveredOrders": by_status.get(OrderStatus.delivered.value, 0),
        "undeliveredOrders": by_status.get(OrderStatus.undelivered.value, 0),
        "ongoingOrders": by_status.get(OrderStatus.shipped.value, 0),
        "lastActive": last_active,
    }


def list_riders(session: Session, only_active: bool = False) -> List[User]:
    query = select(User).where(User.role == UserRole.rider.value)
    if only_active:
        query = query.where(User.is_active == True)  # noqa: E712
    return session.exec(query.order_by(User.name)).all()


def set_rider_active(session: Session, rider_id: int, is_active: bool) -> User:
    rider = session.get(User, rider_id)
    if not rider or rider.role != UserRole.rider.value:
        raise RiderNotFound(rider_id)

    rider.is_active = is_active
    rider.updated_at = datetime.utcnow()
    session.add(rider)
    session.commit()
    session.refresh(rider)

    logger.info(f"Rider {rider.id} set active={is_active}")
    return rider


def rider_dashboard(session: Session, rider: User) -> dict:
    stats = rider_stats(session, rider.id)

    today = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    today_orders = session.exec(
        select(func.count(Order.id))
        .where(Order.assigned_rider_id == rider.id)
        .where(Order.updated_at >= today)
    ).one()

    total = stats["totalAssigned"]
    delivery_rate = (stats["deliveredOrders"] / total) * 100 if total else 0

    return {
        "counts": {
            "totalAssigned": total,
            "shippedOrders": stats["ongoingOrders"],
            "deliveredOrders": stats["deliveredOrders"],
            "undeliveredOrders": stats["undeliveredOrders"],
            "todayOrders": today_orders,
        },
        "performance": {"deliveryRate": f"{delivery_rate:.2f}"},
    }
