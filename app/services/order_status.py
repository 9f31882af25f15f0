# app/services/order_status.py

from datetime import datetime
from typing import Optional
import logging

from sqlmodel import Session

from app.constants.order_status import (
    CANCELLABLE_STATUSES,
    DELIVERY_OUTCOMES,
    TERMINAL_STATUSES,
    TIMESTAMP_FIELDS,
    OrderStatus,
    can_transition,
)
from app.constants.roles import UserRole
from app.exceptions import (
    Forbidden,
    InvalidState,
    InvalidTransition,
    OrderNotFound,
    RiderNotFound,
    RiderUnavailable,
)
from app.models.order import Order
from app.models.user import User
from app.services.inventory_service import restock_order_items
from app.services.order_event_service import actor_label, log_order_event, log_status_change

logger = logging.getLogger(__name__)


class OrderStatusController:
    """
    Owns every write to ``Order.status`` and ``Order.assigned_rider_id``.

    Each public method validates first and commits once, so a failed call
    leaves the order exactly as it was.
    """

    def __init__(self, session: Session):
        self.session = session

    # -------- LOOKUPS --------

    def get_order(self, order_id: int) -> Order:
        order = self.session.get(Order, order_id)
        if not order:
            raise OrderNotFound(order_id)
        return order

    def get_rider(self, rider_id: int) -> User:
        rider = self.session.get(User, rider_id)
        if not rider or rider.role != UserRole.rider.value:
            raise RiderNotFound(rider_id)
        return rider

    # -------- OPERATIONS --------

    def update_status(
        self,
        order_id: int,
        new_status: OrderStatus | str,
        actor: Optional[User] = None,
    ) -> Order:
        order = self.get_order(order_id)
        self._apply_transition(order, OrderStatus(new_status).value, actor)
        self._commit(order)
        return order

    def assign_rider(self, order_id: int, rider_id: int, actor: Optional[User] = None) -> Order:
        order = self.get_order(order_id)

        if order.status != OrderStatus.paid.value:
            logger.warning(f"Rider assignment rejected for order {order.id} in status {order.status}")
            raise InvalidState(f"Cannot assign rider to order in status: {order.status}")

        rider = self.get_rider(rider_id)
        if not rider.is_active:
            raise RiderUnavailable(f"Rider {rider.name} is not active")

        # shipped transition first: if it is rejected the rider is never written
        self._apply_transition(order, OrderStatus.shipped.value, actor)
        order.assigned_rider_id = rider.id

        log_order_event(
            self.session,
            order_id=order.id,
            event_type="rider_assigned",
            label=f"Assigned to {rider.name}",
            created_by=actor_label(actor),
            meta={"rider_id": rider.id},
        )

        self._commit(order)
        logger.info(f"Order {order.id} assigned to rider {rider.id}")
        return order

    def cancel_order(self, order_id: int, actor: User) -> Order:
        order = self.get_order(order_id)

        if actor.role != UserRole.admin.value and order.user_id != actor.id:
            raise Forbidden("Not authorized to cancel this order")

        if order.status not in CANCELLABLE_STATUSES:
            logger.warning(f"Cancellation rejected for order {order.id} in status {order.status}")
            raise InvalidState(f"Order cannot be cancelled in status: {order.status}")

        self._apply_transition(order, OrderStatus.cancelled.value, actor)
        self._commit(order)
        return order

    def record_delivery_outcome(self, order_id: int, outcome: OrderStatus | str, rider: User) -> Order:
        outcome = OrderStatus(outcome).value
        if outcome not in DELIVERY_OUTCOMES:
            raise InvalidState("Riders can only mark orders as Delivered or Undelivered")

        order = self.session.get(Order, order_id)
        if not order or order.assigned_rider_id != rider.id:
            raise OrderNotFound(order_id)

        if order.status != OrderStatus.shipped.value:
            raise InvalidState(f"Cannot update order in status: {order.status}")

        self._apply_transition(order, outcome, rider)
        self._commit(order)
        return order

    # -------- INTERNALS --------

    def _apply_transition(self, order: Order, target: str, actor: Optional[User]):
        current = order.status

        if current in TERMINAL_STATUSES or not can_transition(current, target):
            logger.warning(f"Rejected transition {current} -> {target} for order {order.id}")
            raise InvalidTransition(current, target)

        now = datetime.utcnow()
        order.status = target

        stamp = TIMESTAMP_FIELDS.get(target)
        if stamp and getattr(order, stamp) is None:
            setattr(order, stamp, now)

        order.updated_at = now

        if target == OrderStatus.cancelled.value:
            restock_order_items(self.session, order.id)

        log_status_change(self.session, order.id, current, target, actor_label(actor))
        logger.info(f"Order {order.id} moved {current} -> {target}")

    def _commit(self, order: Order):
        self.session.add(order)
        self.session.commit()
        self.session.refresh(order)
