import logging

from fastapi import HTTPException
from sqlmodel import Session

from app.config import settings
from app.models.order import Order
from app.models.order_item import OrderItem
from app.models.product import Product, ProductVariant
from app.models.user import User
from app.schemas.order_schemas import OrderCreate
from app.services.inventory_service import InsufficientStock, reserve_stock
from app.services.order_event_service import STATUS_LABELS, actor_label, log_order_event

logger = logging.getLogger(__name__)


def calculate_prices(items_price: float) -> dict:
    """Price sums frozen on the order at checkout."""
    tax_price = round(items_price * settings.tax_rate, 2)
    shipping_price = 0.0 if items_price > settings.free_shipping_threshold else settings.flat_shipping_price

    return {
        "items_price": round(items_price, 2),
        "tax_price": tax_price,
        "shipping_price": shipping_price,
        "total_price": round(items_price + tax_price + shipping_price, 2),
    }


def place_order(session: Session, user: User, payload: OrderCreate) -> Order:
    if not payload.orderItems:
        raise HTTPException(400, "No order items")

    lines = []
    for item in payload.orderItems:
        product = session.get(Product, item.product)
        if not product or not product.is_active:
            session.rollback()
            raise HTTPException(404, f"Product not found: {item.product}")

        variant = session.get(ProductVariant, item.variant)
        if not variant or variant.product_id != product.id:
            session.rollback()
            raise HTTPException(404, f"Variant not found: {item.variant}")

        try:
            reserve_stock(session, variant, item.quantity)
        except InsufficientStock as e:
            session.rollback()
            raise HTTPException(400, str(e))

        lines.append(
            OrderItem(
                product_id=product.id,
                variant_id=variant.id,
                name=product.name,
                color_name=variant.color_name,
                color_code=variant.color_code,
                size=variant.size,
                price=variant.price,
                quantity=item.quantity,
                image=product.images[0] if product.images else None,
            )
        )

    items_price = sum(line.price * line.quantity for line in lines)

    order = Order(
        user_id=user.id,
        shipping_address=payload.shippingAddress.model_dump(),
        contact_info=payload.contactInfo.model_dump(),
        payment_method=payload.paymentMethod,
        notes=payload.notes,
        status="pending",
        items=lines,
        **calculate_prices(items_price),
    )

    session.add(order)
    session.flush()

    log_order_event(
        session,
        order_id=order.id,
        event_type="order_placed",
        label=STATUS_LABELS["pending"],
        created_by=actor_label(user),
        meta={"total_price": order.total_price},
    )

    session.commit()
    session.refresh(order)

    logger.info(f"Order {order.id} placed by user {user.id} for {order.total_price}")
    return order
