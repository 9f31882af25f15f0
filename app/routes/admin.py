from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select
from app.constants.order_status import OrderStatus
from app.constants.roles import UserRole
from app.database import get_session
from app.dependencies.capabilities import require_admin
from app.models.approved_email import ApprovedEmail
from app.models.order import Order
from app.models.user import User
from app.schemas.admin_schemas import ApprovedEmailCreate, RiderStatusUpdate
from app.schemas.order_schemas import AssignRider, StatusUpdate
from app.services.approval_service import add_approved_email, remove_approved_email
from app.services.dashboard_service import dashboard_stats
from app.services.order_event_service import list_order_events
from app.services.order_status import OrderStatusController
from app.services.rider_service import list_riders, rider_stats, set_rider_active
from app.utils.pagination import paginate
from app.utils.responses import create_response
from app.utils.serializers import (
    format_approved_email,
    format_order_event,
    format_order_for_view,
    format_user_brief,
)

# every admin route goes through the same capability check
router = APIRouter(dependencies=[Depends(require_admin)])


# -------- DASHBOARD --------

@router.get("/dashboard")
def get_dashboard(session: Session = Depends(get_session)):
    stats = dashboard_stats(session)
    stats["recentOrders"] = [format_order_for_view(session, o) for o in stats["recentOrders"]]
    return create_response(True, "Dashboard stats retrieved successfully", stats)


# -------- ORDERS --------

@router.get("/orders")
def list_all_orders(
    page: int = 1,
    limit: int | None = None,
    status: OrderStatus | None = None,
    session: Session = Depends(get_session),
):
    query = select(Order)

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
        "Orders retrieved successfully",
        [format_order_for_view(session, o) for o in orders],
        meta,
    )


@router.get("/orders/{order_id}")
def get_order_detail(order_id: int, session: Session = Depends(get_session)):
    order = session.get(Order, order_id)
    if not order:
        raise HTTPException(404, "Order not found")

    data = format_order_for_view(session, order)
    data["timeline"] = [format_order_event(e) for e in list_order_events(session, order.id)]

    return create_response(True, "Order retrieved successfully", data)


@router.patch("/orders/{order_id}/status")
def update_order_status(
    order_id: int,
    payload: StatusUpdate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    order = OrderStatusController(session).update_status(order_id, payload.status, actor=admin)
    return create_response(True, "Order status updated successfully", format_order_for_view(session, order))


@router.patch("/orders/{order_id}/assign")
def assign_rider(
    order_id: int,
    payload: AssignRider,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    order = OrderStatusController(session).assign_rider(order_id, payload.riderId, actor=admin)
    return create_response(True, "Rider assigned successfully", format_order_for_view(session, order))


# -------- APPROVED EMAILS --------

@router.get("/approved-emails")
def get_approved_emails(
    page: int = 1,
    limit: int | None = None,
    role: UserRole | None = None,
    session: Session = Depends(get_session),
):
    query = select(ApprovedEmail)

    if role:
        query = query.where(ApprovedEmail.role == role.value)

    approved, meta = paginate(
        session=session,
        query=query.order_by(ApprovedEmail.created_at.desc(), ApprovedEmail.id.desc()),
        page=page,
        limit=limit,
    )

    return create_response(
        True,
        "Approved emails retrieved successfully",
        [format_approved_email(a) for a in approved],
        meta,
    )


@router.post("/approved-emails", status_code=201)
def create_approved_email(
    payload: ApprovedEmailCreate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    approved = add_approved_email(session, payload.email, payload.role.value, added_by=admin)
    return create_response(True, "Email approved successfully", format_approved_email(approved))


@router.delete("/approved-emails/{approved_id}")
def delete_approved_email(approved_id: int, session: Session = Depends(get_session)):
    remove_approved_email(session, approved_id)
    return create_response(True, "Approved email removed successfully")


# -------- RIDERS --------

@router.get("/riders")
def get_riders(
    is_active: bool | None = None,
    session: Session = Depends(get_session),
):
    riders = list_riders(session)
    if is_active is not None:
        riders = [r for r in riders if r.is_active == is_active]

    return create_response(True, "Riders retrieved successfully", [
        {
            **format_user_brief(r),
            "isActive": r.is_active,
            "stats": rider_stats(session, r.id),
        }
        for r in riders
    ])


@router.patch("/riders/{rider_id}/status")
def update_rider_status(
    rider_id: int,
    payload: RiderStatusUpdate,
    session: Session = Depends(get_session),
):
    rider = set_rider_active(session, rider_id, payload.isActive)
    message = "Rider activated" if rider.is_active else "Rider deactivated"
    return create_response(True, message, {**format_user_brief(rider), "isActive": rider.is_active})
