from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select
from app.constants.order_status import OrderStatus
from app.constants.roles import Capability, UserRole
from app.database import get_session
from app.dependencies.capabilities import has_capability, require_shopper
from app.models.order import Order
from app.models.user import User
from app.schemas.order_schemas import OrderCreate, StatusUpdate
from app.services.order_placement import place_order
from app.services.order_status import OrderStatusController
from app.utils.pagination import paginate
from app.utils.responses import create_response
from app.utils.serializers import format_order, format_order_for_view
from app.utils.token import get_current_user

router = APIRouter(dependencies=[Depends(get_current_user)])


def _can_view(user: User, order: Order) -> bool:
    if order.user_id == user.id:
        return True
    if has_capability(user, Capability.orders_manage):
        return True
    return user.role == UserRole.rider.value and order.assigned_rider_id == user.id


# -------- CUSTOMER ORDERS --------

@router.post("", status_code=201)
def create_order(
    payload: OrderCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_shopper),
):
    order = place_order(session, current_user, payload)
    return create_response(True, "Order created successfully", format_order(order))


@router.get("")
def get_my_orders(
    page: int = 1,
    limit: int | None = None,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    query = (
        select(Order)
        .where(Order.user_id == current_user.id)
        .order_by(Order.created_at.desc(), Order.id.desc())
    )
    orders, meta = paginate(session=session, query=query, page=page, limit=limit)

    return create_response(
        True,
        "Orders retrieved successfully",
        [format_order(o) for o in orders],
        meta,
    )


@router.get("/{order_id}")
def get_order(
    order_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    order = session.get(Order, order_id)
    if not order:
        raise HTTPException(404, "Order not found")

    if not _can_view(current_user, order):
        raise HTTPException(403, "Not authorized to access this order")

    return create_response(True, "Order retrieved successfully", format_order_for_view(session, order))


@router.patch("/{order_id}/status")
def update_order_status(
    order_id: int,
    payload: StatusUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    controller = OrderStatusController(session)

    if has_capability(current_user, Capability.orders_manage):
        order = controller.update_status(order_id, payload.status, actor=current_user)
    elif payload.status == OrderStatus.cancelled:
        # customers may only cancel, under the cancellation rules
        order = controller.cancel_order(order_id, actor=current_user)
    else:
        raise HTTPException(403, "Not authorized to update this order status")

    return create_response(True, "Order status updated successfully", format_order(order))


@router.patch("/{order_id}/cancel")
def cancel_order(
    order_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    order = OrderStatusController(session).cancel_order(order_id, actor=current_user)
    return create_response(True, "Order cancelled successfully", format_order(order))
