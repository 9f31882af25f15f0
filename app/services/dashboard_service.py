from datetime import datetime

from sqlmodel import Session, func, select

from app.constants.order_status import REVENUE_STATUSES, OrderStatus
from app.constants.roles import UserRole
from app.models.order import Order
from app.models.user import User


def status_counts(session: Session) -> dict:
    rows = session.exec(
        select(Order.status, func.count(Order.id)).group_by(Order.status)
    ).all()
    by_status = {status: count for status, count in rows}

    counts = {"totalOrders": sum(by_status.values())}
    for status in OrderStatus:
        counts[f"{status.value}Orders"] = by_status.get(status.value, 0)
    return counts


def monthly_sales(session: Session, year: int | None = None) -> list:
    year = year or datetime.utcnow().year
    start = datetime(year, 1, 1)
    end = datetime(year + 1, 1, 1)

    orders = session.exec(
        select(Order.created_at, Order.total_price)
        .where(Order.status.in_(REVENUE_STATUSES))
        .where(Order.created_at >= start)
        .where(Order.created_at < end)
    ).all()

    months = [{"month": m, "total": 0.0, "count": 0} for m in range(1, 13)]
    for created_at, total_price in orders:
        bucket = months[created_at.month - 1]
        bucket["total"] += total_price
        bucket["count"] += 1

    return months


def dashboard_stats(session: Session) -> dict:
    counts = status_counts(session)

    counts["totalUsers"] = session.exec(
        select(func.count(User.id)).where(User.role == UserRole.customer.value)
    ).one()
    counts["totalRiders"] = session.exec(
        select(func.count(User.id)).where(User.role == UserRole.rider.value)
    ).one()

    recent_orders = session.exec(
        select(Order).order_by(Order.created_at.desc()).limit(5)
    ).all()

    return {
        "counts": counts,
        "recentOrders": recent_orders,
        "monthlySales": monthly_sales(session),
    }
