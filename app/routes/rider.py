from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select
from app.constants.order_status import OrderStatus
from app.database import get_session
from app.dependencies.capabilities import require_rider
from app.models.order import Order
from app.models.user import User
from app.schemas.order_schemas import StatusUpdate
from app.services.order_status import OrderStatusController
from app.services.rider_service import rider_dashboard
from app.utils.pagination import paginate
from app.utils.responses import create_response
from app.utils.serializers import format_order_for_view

router = APIRouter(dependencies=[Depends(require_rider)])


# -------- ASSIGNED ORDERS --------

@router.get("/orders")
def get_assigned_orders(
    page: int = 1,
    limit: int | None = None,
    status: OrderStatus | None = None,
    session: Session = Depends(get_session),
    rider: User = Depends(require_rider),
):
    query = select(Order).where(Order.assigned_rider_id == rider.id)

    if status:
        query = query.where(Order.status == status.value)

    orders, meta = paginate(
        session=session,
        query=query.order_by(Order.created_at.desc(), Order.id.desc()),
        page=page,
        limit=limit,
    )

    return create_response(
        True,
        "Assigned orders retrieved successfully",
        [format_order_for_view(session, o) for o in orders],
        meta,
    )


@router.get("/orders/{order_id}")
def get_assigned_order(
    order_id: int,
    session: Session = Depends(get_session),
    rider: User = Depends(require_rider),
):
    order = session.get(Order, order_id)
    if not order or order.assigned_rider_id != rider.id:
        raise HTTPException(404, "Order not found or not assigned to this rider")

    return create_response(True, "Order details retrieved successfully", format_order_for_view(session, order))


@router.patch("/orders/{order_id}/status")
def update_delivery_status(
    order_id: int,
    payload: StatusUpdate,
    session: Session = Depends(get_session),
    rider: User = Depends(require_rider),
):
    order = OrderStatusController(session).record_delivery_outcome(order_id, payload.status, rider)
    return create_response(True, "Order status updated successfully", format_order_for_view(session, order))


# -------- DASHBOARD --------

@router.get("/dashboard")
def get_dashboard(
    session: Session = Depends(get_session),
    rider: User = Depends(require_rider),
):
    stats = rider_dashboard(session, rider)

    recent = session.exec(
        select(Order)
        .where(Order.assigned_rider_id == rider.id)
        .order_by(Order.created_at.desc())
        .limit(5)
    ).all()
    stats["recentOrders"] = [format_order_for_view(session, o) for o in recent]

    return create_response(True, "Rider dashboard stats retrieved successfully", stats)
