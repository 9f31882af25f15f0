from sqlmodel import Session, select
from app.models.order_item import OrderItem
from app.models.product import ProductVariant
import logging

logger = logging.getLogger(__name__)


class InsufficientStock(Exception):
    def __init__(self, variant: ProductVariant, requested: int):
        super().__init__(
            f"Insufficient stock for {variant.product.name} "
            f"({variant.color_name}, {variant.size})"
        )
        self.variant_id = variant.id
        self.requested = requested


def reserve_stock(session: Session, variant: ProductVariant, quantity: int):
    """Take stock for a line at checkout. Caller commits."""
    if variant.stock < quantity:
        raise InsufficientStock(variant, quantity)

    variant.stock -= quantity
    session.add(variant)
    logger.info(f"Reserved {quantity} of variant {variant.id}, stock now {variant.stock}")


def restock_order_items(session: Session, order_id: int) -> int:
    """Return the stock of a cancelled order. Caller commits."""
    order_items = session.exec(
        select(OrderItem).where(OrderItem.order_id == order_id)
    ).all()

    for item in order_items:
        variant = session.get(ProductVariant, item.variant_id)

        if variant:
            variant.stock += item.quantity
            session.add(variant)

    logger.info(f"Restocked {len(order_items)} items for order {order_id}")
    return len(order_items)
